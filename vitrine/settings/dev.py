# vitrine/settings/dev.py
# export DJANGO_SETTINGS_MODULE=vitrine.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']

LOGGING['loggers'].update({
    'assets.renderer': {
        'handlers': ['console'],
        'level': os.getenv('VITE_LOG_LEVEL', 'INFO'),
        'propagate': False,
    },
})

# Dev: le bundler réécrit public/build en continu
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True
