from __future__ import annotations

from django.core.checks import Error, Warning, register

from .conf import KNOWN_PRELOAD_STRATEGIES, get_config
from .exceptions import EntrypointsFileError
from .manifest.loader import load_entrypoints


@register()
def default_build_check(app_configs, **kwargs):
    cfg = get_config()
    if cfg.default_build not in cfg.builds:
        return [Error(
            f"VITE_ASSETS: build par défaut '{cfg.default_build}' absent de 'builds'.",
            hint=f"Builds déclarés: {sorted(cfg.builds)}",
            id="assets.E001",
        )]
    return []


@register()
def preload_strategy_check(app_configs, **kwargs):
    cfg = get_config()
    if cfg.preload not in KNOWN_PRELOAD_STRATEGIES:
        return [Warning(
            f"VITE_ASSETS['preload'] inconnu: {cfg.preload!r}",
            hint=f"Valeurs reconnues: {', '.join(KNOWN_PRELOAD_STRATEGIES)}. "
                 "Toute autre valeur supprime simplement les balises modulepreload.",
            id="assets.W001",
        )]
    return []


@register()
def entrypoints_file_check(app_configs, **kwargs):
    # Pas bloquant si absent : le bundler n'a peut-être pas encore tourné
    messages = []
    for name, build in get_config().builds.items():
        path = build.entrypoints_path
        try:
            content = load_entrypoints(path)
        except EntrypointsFileError as e:
            messages.append(Error(
                f"Build {name}: {e}",
                hint="Relance le build Vite (ou le dev-server) pour régénérer le fichier.",
                id="assets.E002",
            ))
            continue
        if content is None:
            messages.append(Warning(
                f"Build {name}: fichier entrypoints introuvable ({path}).",
                hint="Lance `vite build` ou `vite dev`; les balises seront vides en attendant.",
                id="assets.W002",
            ))
    return messages
