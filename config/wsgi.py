"""WSGI config for StudentStay.

Exposes the WSGI application used by runserver and production WSGI servers
(gunicorn, uwsgi).
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_wsgi_application()
