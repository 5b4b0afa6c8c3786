"""Django project configuration for StudentStay.

Holds the settings package, root URL configuration, the Celery application
and the WSGI/ASGI entry points.
"""

# Import the Celery application as soon as Django starts so shared tasks
# register with it.
from .celery import app as celery_app  # noqa: F401
