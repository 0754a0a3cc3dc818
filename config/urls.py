"""Root URL configuration for the DWG viewer."""
from django.urls import include, path

from apps.core.healthz import liveness, readiness

urlpatterns = [
    # Health endpoints (no auth)
    path("livez/", liveness, name="health-liveness"),
    path("healthz/", readiness, name="health-readiness"),
    path("health/", liveness, name="health-compat"),

    # API
    path("api/dwg/", include("apps.dwg.urls", namespace="dwg")),
]
