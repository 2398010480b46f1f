# vitrine/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Inerte si .env absent
_dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
if _dotenv_path:
    load_dotenv(_dotenv_path, override=False)

BASE_DIR = Path(__file__).resolve().parents[2]  # .../vitrine

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


# --------------------------------------------------------------------------------------
# Clés & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv('SECRET_KEY', 'CHANGE_ME_DEV_ONLY')
DEBUG = False  # Par défaut: sécurisé. Dev.py le passera à True.

ALLOWED_HOSTS: list[str] = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h.strip()]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    "apps.assets.apps.AssetsConfig",
    "apps.pages.apps.PagesConfig",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise doit être juste après SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    # un rendu de page par requête (reset de la dédup des balises Vite)
    'apps.assets.middleware.EntrypointRendererMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'vitrine.urls'

# --------------------------------------------------------------------------------------
# Templates
# --------------------------------------------------------------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'vitrine.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# --------------------------------------------------------------------------------------
# I18N / TZ
# --------------------------------------------------------------------------------------
LANGUAGE_CODE = 'fr'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# --------------------------------------------------------------------------------------
# Static (Django 5) : le build Vite est servi depuis public/ par WhiteNoise
# --------------------------------------------------------------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

PUBLIC_DIR = Path(os.getenv("VITE_PUBLIC_DIR", str(BASE_DIR / "public")))
WHITENOISE_ROOT = PUBLIC_DIR

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

# --------------------------------------------------------------------------------------
# Vite entrypoints
# --------------------------------------------------------------------------------------
VITE_ASSETS = {
    "default_build": "_default",
    "builds": {
        "_default": {
            "build_dir": os.getenv("VITE_BUILD_DIR", "build"),
            "public_dir": PUBLIC_DIR,
            # défaut: <public_dir>/<build_dir>/.vite/entrypoints.json
            "entrypoints_path": os.getenv("VITE_ENTRYPOINTS_PATH") or None,
            "throw_on_missing_entry": env_flag("VITE_THROW_ON_MISSING_ENTRY", default=False),
            "crossorigin": env_flag("VITE_CROSSORIGIN", default=False),
            "script_attributes": {},
            "link_attributes": {},
            "preload_attributes": {},
        },
    },
    "absolute_url": env_flag("VITE_ABSOLUTE_URL", default=False),
    # link-tag | link-header | none
    "preload": os.getenv("VITE_PRELOAD", "link-tag"),
}

# --------------------------------------------------------------------------------------
# Logging (propre, exploitable)
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '[{levelname}] {name}: {message}', 'style': '{'},
        'verbose': {'format': '{asctime} [{levelname}] {name} {module}:{lineno} - {message}', 'style': '{'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'verbose'},
    },
    'root': {'handlers': ['console'], 'level': LOG_LEVEL},
    'loggers': {
        'django.request': {'handlers': ['console'], 'level': 'WARNING', 'propagate': True},
    },
}

LOGGING["loggers"].update({
    "assets.manifest": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "assets.renderer": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "assets.middleware": {"handlers": ["console"], "level": "INFO", "propagate": False},
})

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
