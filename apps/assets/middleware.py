# apps/assets/middleware.py
from __future__ import annotations

import logging
from typing import List

from .conf import PRELOAD_LINK_HEADER
from .renderer import EntrypointRenderer, get_renderer

log = logging.getLogger("assets.middleware")


def build_link_header(renderer: EntrypointRenderer) -> List[str]:
    """Valeurs Link pour les scripts/styles rendus pendant la requête."""
    links: List[str] = []
    for file_path, tag in renderer.rendered_scripts.items():
        # les chunks legacy ne sont chargés que par les navigateurs sans modules
        if tag.get_attribute("nomodule"):
            continue
        href = tag.url or file_path
        links.append(f'<{href}>; rel="modulepreload"')
    for href in renderer.rendered_style_urls:
        links.append(f'<{href}>; rel="preload"; as="style"')
    return links


class EntrypointRendererMiddleware:
    """
    Un rendu de page par requête : l'état de dédup du renderer (propre au
    thread / contexte courant) est vidé avant la vue et après la réponse.
    En mode preload "link-header", les fichiers rendus sont annoncés dans
    l'en-tête Link.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        renderer = get_renderer()
        renderer.reset()
        try:
            response = self.get_response(request)
            if renderer.preload == PRELOAD_LINK_HEADER:
                links = build_link_header(renderer)
                if links:
                    existing = response.get("Link")
                    response["Link"] = ", ".join(([existing] if existing else []) + links)
                    log.debug("Link header: %d preload(s)", len(links))
            return response
        finally:
            renderer.reset()
