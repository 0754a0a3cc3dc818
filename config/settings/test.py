"""Test settings: temporary wwwroot, eager Celery."""
import tempfile
from pathlib import Path

from .base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="dwg-viewer-test-"))

DWG_VIEWER = {
    **DWG_VIEWER,  # noqa: F405
    "FILES_DIR": _TEST_ROOT / "files",
    "CACHE_DIR": _TEST_ROOT / "cache",
    "SCRATCH_DIR": _TEST_ROOT / "scratch",
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
