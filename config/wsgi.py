"""
WSGI entry point for the AMP cache purger, served by gunicorn
(`gunicorn -c gunicorn.conf.py config.wsgi`).
"""
from django.core.wsgi import get_wsgi_application

from config.django import use_settings_for_env

use_settings_for_env()

application = get_wsgi_application()
