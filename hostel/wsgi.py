"""
WSGI config for the hostel manager.

Each worker process runs its own payment scheduler; the payment table's
unique (tenant, year, month) index keeps concurrent runs from duplicating
rows. Set ENABLE_BACKGROUND_SCHEDULER=false on all but one deployment when
running several.
"""
import os

from django.apps import apps
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hostel.settings')

application = get_wsgi_application()

apps.get_app_config('common').start_scheduler()
