"""Celery application of the search model project."""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "searchmodel.settings")

app = Celery("searchmodel")

# Read the CELERY_* keys of the Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()
