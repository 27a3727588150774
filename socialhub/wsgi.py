"""
WSGI config for the socialhub project.

Exposes the WSGI callable as a module-level variable named ``application``.
gunicorn picks it up via ``gunicorn socialhub.wsgi -c gunicorn.conf.py``.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'socialhub.settings')

application = get_wsgi_application()
