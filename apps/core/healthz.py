"""
Health endpoints for container orchestration.

Registration in config/urls.py:
    urlpatterns = [
        path("livez/", liveness, name="health-liveness"),
        path("healthz/", readiness, name="health-readiness"),
    ]

Readiness fails when the drawings directory is missing or the preview
cache directory cannot be written.
"""
import os

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

from apps.dwg.conf import get_viewer_config

@csrf_exempt
@require_GET
def liveness(request):
    """Liveness probe: Is the process alive?"""
    return JsonResponse({"status": "alive"})


@csrf_exempt
@require_GET
def readiness(request):
    """Readiness probe: Can we serve previews?"""
    config = get_viewer_config()
    checks = {}

    checks["files_dir"] = "ok" if config.files_dir.is_dir() else "missing"

    try:
        config.cache_dir.mkdir(parents=True, exist_ok=True)
        writable = os.access(config.cache_dir, os.W_OK)
        checks["cache_dir"] = "ok" if writable else "read-only"
    except OSError as e:
        checks["cache_dir"] = str(e)

    if any(value != "ok" for value in checks.values()):
        return JsonResponse(
            {"status": "unhealthy", "checks": checks},
            status=503,
        )

    return JsonResponse({"status": "healthy", "checks": checks})
