"""Local development settings.

SQLite, debug pages, the browsable API and verbose logging from the
portfolio apps. Never deploy with these.
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ],
}

# Calendar and picker transitions are logged at DEBUG/INFO
LOGGING['loggers']['apps']['level'] = os.environ.get('DJANGO_LOG_LEVEL', 'DEBUG')
