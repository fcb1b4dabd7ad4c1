"""
Celery application for editorial_portal.

Task modules are discovered from installed apps; settings come from the
Django settings module under the CELERY_ namespace.
"""
import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'editorial_portal.settings')

app = Celery('editorial_portal')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
