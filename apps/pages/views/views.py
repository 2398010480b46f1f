# apps/pages/views/views.py
from __future__ import annotations

import logging

from django.conf import settings
from django.views.generic import TemplateView

from apps.assets.renderer import get_renderer

log = logging.getLogger("pages.home")


class HomeView(TemplateView):
    """
    Page d'accueil : le gabarit appelle les balises Vite de l'entrée `app`
    (links dans <head>, scripts en fin de <body>).
    """
    template_name = "pages/home.html"
    entry_name = "app"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["entry_name"] = getattr(settings, "PAGES_HOME_ENTRY", self.entry_name)
        ctx["vite_mode"] = get_renderer().get_mode()
        if ctx["vite_mode"] is None:
            log.info("home rendered without entrypoints file (no assets)")
        return ctx
