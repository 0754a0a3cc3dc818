"""Development settings: DEBUG=True, local wwwroot."""
from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ["*"]

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405

# Run background renders inline without a broker
CELERY_TASK_ALWAYS_EAGER = True
