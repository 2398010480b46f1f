# vitrine/settings/test_cli.py
from .dev import *  # noqa: F401,F403

# Cache local en mémoire
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "cli-tests",
        "TIMEOUT": 300,
    }
}

WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = False

# Les tests écrivent leurs propres entrypoints.json via override_settings
VITE_ASSETS["preload"] = "link-tag"
VITE_ASSETS["absolute_url"] = False

LOGGING['root']['level'] = 'WARNING'
