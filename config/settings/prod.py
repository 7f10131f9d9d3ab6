"""Production settings.

Every secret and host name comes from the environment. Calendar writes
lock the property row, so point DB_ENGINE at a database that supports
``SELECT ... FOR UPDATE`` (PostgreSQL).
"""

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403

DEBUG = False

ALLOWED_HOSTS = [host for host in os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',') if host]

if SECRET_KEY == 'replace-me-in-production':
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production')

CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
}

DATABASES['default']['CONN_MAX_AGE'] = int(os.environ.get('DB_CONN_MAX_AGE', 60))
