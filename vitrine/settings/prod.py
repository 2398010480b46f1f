# vitrine/settings/prod.py
from .base import *

DEBUG = False

# Domaine(s) à fournir via env
SITE_DOMAIN = os.getenv('SITE_DOMAIN')  # ex: "www.example.com"
SITE_ALIASES = os.getenv("SITE_ALIASES", "")  # ex: "example.com,foo.example.com"
if not SITE_DOMAIN:
    raise RuntimeError("SITE_DOMAIN n'est pas défini en production.")

ALIASES = [h.strip() for h in SITE_ALIASES.split(",") if h.strip()]
ALLOWED_HOSTS = [SITE_DOMAIN, "127.0.0.1"] + ALIASES

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = 31536000
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

# Reverse proxy (si derrière un LB terminant TLS)
if env_flag('USE_X_FORWARDED_PROTO', default=True):
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# Préchargement par en-tête Link plutôt que par balises (surchargeable)
VITE_ASSETS["preload"] = os.getenv("VITE_PRELOAD", "link-header")

# Log niveau INFO/ERROR
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING['root']['level'] = LOG_LEVEL
LOGGING['loggers']['django.request']['level'] = 'ERROR'
