"""
WSGI config for the trip map store.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tripmap_backend.settings")

application = get_wsgi_application()
