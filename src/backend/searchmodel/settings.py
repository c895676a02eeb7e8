"""
Django settings for the search model project.

Every value can be overridden through the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def get_bool(name, default=False):
    """Read a boolean from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-development-key")
DEBUG = get_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "indexing",
    "blog",
]

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("DB_USER", ""),
        "PASSWORD": os.environ.get("DB_PASSWORD", ""),
        "HOST": os.environ.get("DB_HOST", ""),
        "PORT": os.environ.get("DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True
TIME_ZONE = "UTC"

# Elasticsearch
ELASTICSEARCH_HOSTS = os.environ.get(
    "ELASTICSEARCH_HOSTS", "http://elasticsearch:9200"
).split(",")
SEARCH_INDEXING_ENABLED = get_bool("SEARCH_INDEXING_ENABLED", True)
SEARCH_INDEXING_ASYNC = get_bool("SEARCH_INDEXING_ASYNC", False)
SEARCH_INDEX_PREFIX = os.environ.get("SEARCH_INDEX_PREFIX", "")

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_TASK_ALWAYS_EAGER = get_bool("CELERY_TASK_ALWAYS_EAGER", False)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{asctime} {name} {levelname} {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("LOGGING_LEVEL_ROOT", "INFO"),
    },
    "loggers": {
        "indexing": {
            "handlers": ["console"],
            "level": os.environ.get("LOGGING_LEVEL_INDEXING", "INFO"),
            "propagate": False,
        },
        "elastic_transport": {
            "level": os.environ.get("LOGGING_LEVEL_ELASTICSEARCH", "WARNING"),
        },
    },
}
