"""Base settings shared by all environments."""
import os
import tempfile
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")

DEBUG = False

ALLOWED_HOSTS = [
    h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost").split(",")
    if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "apps.dwg",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

STATIC_URL = "/static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "Europe/Rome"

# ---------------------------------------------------------------------------
# DWG viewer
# ---------------------------------------------------------------------------

WWWROOT = Path(os.environ.get("DWG_VIEWER_WWWROOT", BASE_DIR / "wwwroot"))

DWG_VIEWER = {
    "FILES_DIR": Path(os.environ.get("DWG_VIEWER_FILES_DIR", WWWROOT / "files")),
    "CACHE_DIR": Path(os.environ.get("DWG_VIEWER_CACHE_DIR", WWWROOT / "cache")),
    "SCRATCH_DIR": Path(
        os.environ.get("DWG_VIEWER_SCRATCH_DIR", Path(tempfile.gettempdir()) / "dwg-viewer")
    ),
    "SOURCE_PATTERNS": ["*.dwg", "*.dxf"],
    "RENDER_WIDTH": 1600,
    "RENDER_HEIGHT": 1600,
    "RENDER_BACKGROUND": "#ffffff",
    # Standard floor height in metres
    "DEFAULT_HEIGHT": 3.0,
    "FLOORS": [
        {
            "name": "PIANO TERZO",
            "vertical_offset": 0.0,
            "height": 3.0,
            "tint_color": [74, 144, 226],
            "keywords": ["TERZO", "PIANO"],
            "default_unless": ["SOTTOTETTO", "TETTO"],
        },
        {
            "name": "SOTTOTETTO",
            "vertical_offset": 3.0,
            "height": 2.5,
            "tint_color": [230, 126, 34],
            "keywords": ["SOTTOTETTO", "TETTO"],
        },
    ],
    "SECTIONS": [
        {"name": "stato-di-fatto", "label": "STATO DI FATTO"},
        {"name": "progetto", "label": "PROGETTO"},
    ],
}

# ---------------------------------------------------------------------------
# Celery
# ---------------------------------------------------------------------------

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "apps": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "ezdxf": {
            "level": "WARNING",
        },
        "matplotlib": {
            "level": "WARNING",
        },
    },
}
