"""Development settings for StudentStay.

Extends the base settings with debug mode, permissive hosts and
human-readable console logs. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

LOGGING['loggers']['apps']['level'] = 'DEBUG'
