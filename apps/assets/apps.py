# apps/assets/apps.py
from django.apps import AppConfig
import logging

log = logging.getLogger("apps.assets.apps")


class AssetsConfig(AppConfig):
    name = "apps.assets"
    label = "assets"
    verbose_name = "Vite assets"

    def ready(self):
        # checks + receiver setting_changed
        from . import checks  # noqa: F401
        from . import renderer  # noqa: F401

        log.info("AssetsConfig ready: builds=%s", renderer.get_renderer().lookups.names())
