"""Production settings for StudentStay.

Sensitive values must come from environment variables; the base defaults
are development conveniences only.
"""

import os

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403
from .base import SECRET_KEY

# Never run with debug enabled in production
DEBUG = False

if SECRET_KEY == 'replace-me-in-production':
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production.')

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')

# Configure secure proxies and cookies
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
