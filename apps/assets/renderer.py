# apps/assets/renderer.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set

from asgiref.local import Local
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.safestring import SafeString, mark_safe

from .conf import PRELOAD_LINK_TAG, ViteAssetsConfig, get_config
from .manifest.lookup import POLYFILLS_LEGACY, EntrypointsLookup, EntrypointsLookupCollection
from .paths import PublicDirResolver
from .signals import render_asset_tag
from .tags import inline
from .tags.builder import TagBuilder, TagBuilderCollection, generate_tag
from .tags.model import Tag

log = logging.getLogger("assets.renderer")

TagObserver = Callable[[Tag, bool], None]
PathResolver = Callable[[str], Path]

MODE_BUILD = "build"
MODE_DEV = "dev"

# Littéral attendu tel quel par les gabarits existants (un bloc par CSS).
# Chemin interpolé brut : il vient du fichier écrit par le bundler.
LAZY_LINK_HTML = (
    '<link rel="preload" href="{}" as="style" onload="this.onload=null;this.rel=\'stylesheet\'">'
    '<noscript><link rel="stylesheet" href="{}"></noscript>'
)

_UPPER_RE = re.compile(r"(?<=[^-])([A-Z])")


def pascal_to_kebab(value: str) -> str:
    """"vite-legacy-entry-MyEntry" -> "vite-legacy-entry-my-entry"."""
    return _UPPER_RE.sub(r"-\1", value).lower()


def _dispatch_signal(tag: Tag, is_build: bool) -> None:
    render_asset_tag.send(sender=EntrypointRenderer, tag=tag, is_build=is_build)


@dataclass
class RenderState:
    """État de déduplication d'un rendu de page; vidé uniquement par reset()."""

    scripts: Dict[str, Tag] = field(default_factory=dict)
    styles: List[str] = field(default_factory=list)
    style_urls: Dict[str, str] = field(default_factory=dict)
    vite_clients: Set[str] = field(default_factory=set)
    react_refresh: Set[str] = field(default_factory=set)
    legacy_bootstraps: Set[str] = field(default_factory=set)

    def clear(self) -> None:
        self.scripts.clear()
        self.styles.clear()
        self.style_urls.clear()
        self.vite_clients.clear()
        self.react_refresh.clear()
        self.legacy_bootstraps.clear()

    def is_empty(self) -> bool:
        return not (self.scripts or self.styles or self.vite_clients or self.react_refresh or self.legacy_bootstraps)


class EntrypointRenderer:
    """
    Résout une entrée du bundler en balises <script>/<link> et garantit qu'un même
    fichier physique n'est émis qu'une fois par rendu de page (jusqu'au reset()).
    """

    def __init__(
        self,
        lookups: EntrypointsLookupCollection,
        builders: TagBuilderCollection,
        *,
        absolute_url: bool = False,
        preload: str = PRELOAD_LINK_TAG,
        on_tag: Optional[TagObserver] = None,
        path_resolver: Optional[PathResolver] = None,
    ):
        self.lookups = lookups
        self.builders = builders
        self.absolute_url = absolute_url
        self.preload = preload
        self.on_tag: TagObserver = on_tag or _dispatch_signal
        self.path_resolver = path_resolver
        # un état par thread / contexte async : deux requêtes concurrentes ne se dédupliquent pas
        self._local = Local()

    # ---------------------------
    # Cycle de vie
    # ---------------------------
    @property
    def state(self) -> RenderState:
        state = getattr(self._local, "state", None)
        if state is None:
            state = self._local.state = RenderState()
        return state

    def reset(self) -> None:
        self.state.clear()

    @property
    def rendered_scripts(self) -> Mapping[str, Tag]:
        return dict(self.state.scripts)

    @property
    def rendered_styles(self) -> List[str]:
        return list(self.state.styles)

    @property
    def rendered_style_urls(self) -> List[str]:
        """URLs effectivement émises (complétées si absolute_url), dans l'ordre."""
        return [self.state.style_urls.get(p, p) for p in self.state.styles]

    def get_mode(self, build: Optional[str] = None) -> Optional[str]:
        lookup = self.lookups.get(build)
        if not lookup.has_file():
            return None
        return MODE_BUILD if lookup.is_build() else MODE_DEV

    # ---------------------------
    # Helpers
    # ---------------------------
    def _key(self, build: Optional[str]) -> str:
        return build or self.lookups.default_build

    def _should_use_absolute_url(self, lookup: EntrypointsLookup, absolute_url: bool) -> bool:
        return lookup.vite_server() is None and (self.absolute_url or absolute_url is True)

    @staticmethod
    def _complete_url(path: str, use_absolute_url: bool, request: Any = None) -> str:
        if path.startswith("http") or not use_absolute_url or request is None:
            return path
        return request.build_absolute_uri(path)

    def _preload_tags(
        self,
        files: Iterable[str],
        lookup: EntrypointsLookup,
        builder: TagBuilder,
        use_absolute_url: bool,
        request: Any,
    ) -> List[Tag]:
        tags: List[Tag] = []
        for file_path in files:
            if file_path in self.state.scripts:
                continue
            tag = builder.create_module_preload_link_tag(
                self._complete_url(file_path, use_absolute_url, request),
                {"integrity": lookup.file_hash(file_path)},
            )
            tags.append(tag)
            self.state.scripts[file_path] = tag
        return tags

    def _finalize(self, tags: List[Tag], is_build: bool) -> List[Tag]:
        for tag in tags:
            self.on_tag(tag, is_build)

        if self.preload != PRELOAD_LINK_TAG:
            # Les modulepreload passent par un autre canal (en-tête Link)
            tags = [tag for tag in tags if not tag.is_module_preload()]
        return tags

    @staticmethod
    def _join(tags: Iterable[Tag]) -> SafeString:
        return mark_safe("".join(generate_tag(tag) for tag in tags))

    # ---------------------------
    # Scripts
    # ---------------------------
    def script_tags(
        self,
        entry_name: str,
        *,
        build: Optional[str] = None,
        absolute_url: bool = False,
        dependency: Optional[str] = None,
        attr: Optional[Mapping[str, Any]] = None,
        request: Any = None,
    ) -> List[Tag]:
        lookup = self.lookups.get(build)
        if not lookup.has_file():
            return []

        builder = self.builders.get(build)
        key = self._key(build)
        use_absolute_url = self._should_use_absolute_url(lookup, absolute_url)
        vite_server = lookup.vite_server()
        is_build = lookup.is_build()
        state = self.state

        tags: List[Tag] = []

        if vite_server is not None:
            base = lookup.base()
            if key not in state.vite_clients:
                tags.append(builder.create_vite_client_script(f"{vite_server}{base}@vite/client"))
                state.vite_clients.add(key)

            if dependency == "react" and key not in state.react_refresh:
                tags.append(builder.create_react_refresh_script(f"{vite_server}{base}"))
                state.react_refresh.add(key)

        elif lookup.is_legacy_plugin_enabled() and key not in state.legacy_bootstraps:
            tags.append(builder.create_detect_modern_browser_script())
            tags.append(builder.create_dynamic_fallback_script())
            tags.append(builder.create_safari_no_module_script())

            # normalement un seul fichier
            for file_path in lookup.js_files(POLYFILLS_LEGACY):
                tags.append(builder.create_script_tag({
                    "nomodule": True,
                    "crossorigin": True,
                    "src": self._complete_url(file_path, use_absolute_url, request),
                    "id": inline.LEGACY_POLYFILL_ID,
                }))
            state.legacy_bootstraps.add(key)
            log.debug("legacy bootstrap emitted for build=%s", key)

        for file_path in lookup.js_files(entry_name):
            if file_path in state.scripts:
                log.debug("script already rendered, skipped: %s", file_path)
                continue
            tag = builder.create_script_tag({
                "type": "module",
                "src": self._complete_url(file_path, use_absolute_url, request),
                "integrity": lookup.file_hash(file_path),
                **(attr or {}),
            })
            tags.append(tag)
            state.scripts[file_path] = tag

        if lookup.has_legacy(entry_name):
            element_id = pascal_to_kebab(f"vite-legacy-entry-{entry_name}")
            file_path = lookup.legacy_js_file(entry_name)
            if file_path not in state.scripts:
                tag = builder.create_script_tag(
                    {
                        "nomodule": True,
                        "data-src": self._complete_url(file_path, use_absolute_url, request),
                        "id": element_id,
                        "crossorigin": True,
                        "class": inline.LEGACY_ENTRY_CLASS,
                        "integrity": lookup.file_hash(file_path),
                    },
                    inline.system_js_inline_code(element_id),
                )
                tags.append(tag)
                state.scripts[file_path] = tag

        return self._finalize(tags, is_build)

    def render_scripts(self, entry_name: str, **options: Any) -> SafeString:
        return self._join(self.script_tags(entry_name, **options))

    # ---------------------------
    # Links
    # ---------------------------
    def link_tags(
        self,
        entry_name: str,
        *,
        build: Optional[str] = None,
        absolute_url: bool = False,
        preload_dynamic_imports: bool = False,
        attr: Optional[Mapping[str, Any]] = None,
        request: Any = None,
    ) -> List[Tag]:
        lookup = self.lookups.get(build)
        if not lookup.has_file():
            return []

        builder = self.builders.get(build)
        use_absolute_url = self._should_use_absolute_url(lookup, absolute_url)
        is_build = lookup.is_build()

        tags: List[Tag] = []

        for file_path in lookup.css_files(entry_name):
            if file_path in self.state.styles:
                continue
            href = self._complete_url(file_path, use_absolute_url, request)
            tags.append(builder.create_link_stylesheet_tag(
                href,
                {"integrity": lookup.file_hash(file_path), **(attr or {})},
            ))
            self.state.styles.append(file_path)
            self.state.style_urls[file_path] = href

        if is_build:
            tags.extend(self._preload_tags(
                lookup.js_dependencies(entry_name), lookup, builder, use_absolute_url, request,
            ))

        if is_build and preload_dynamic_imports is True:
            tags.extend(self._preload_tags(
                lookup.js_dynamic_dependencies(entry_name), lookup, builder, use_absolute_url, request,
            ))

        return self._finalize(tags, is_build)

    def render_links(self, entry_name: str, **options: Any) -> SafeString:
        return self._join(self.link_tags(entry_name, **options))

    def render_lazy_links(self, entry_name: str, *, build: Optional[str] = None) -> str:
        """
        CSS non bloquants (preload + swap onload, fallback <noscript>).
        Toujours une chaîne : ni TagBuilder, ni observateur, ni filtrage preload.
        """
        lookup = self.lookups.get(build)
        if not lookup.has_file():
            return ""

        chunks: List[str] = []
        for file_path in lookup.css_files(entry_name):
            if file_path in self.state.styles:
                continue
            chunks.append(LAZY_LINK_HTML.format(file_path, file_path))
            self.state.styles.append(file_path)
        return mark_safe("".join(chunks))

    def render_inline_styles(self, entry_name: str, *, build: Optional[str] = None) -> str:
        """
        Build uniquement : contenu des CSS de l'entrée dans un seul <style>.
        Pas de dédup contre les styles déjà rendus. Une erreur de lecture est propagée.
        """
        lookup = self.lookups.get(build)
        if not lookup.has_file() or not lookup.is_build():
            return ""

        resolver = self.path_resolver or PublicDirResolver(lookup.config.public_dir)
        contents = [
            resolver(file_path).read_text(encoding="utf-8")
            for file_path in lookup.css_files(entry_name)
        ]
        return mark_safe('<style type="text/css">' + "".join(contents) + "</style>")


# ---------------------------
# Instance process-wide
# ---------------------------
def build_renderer(config: ViteAssetsConfig, **kwargs: Any) -> EntrypointRenderer:
    lookups = EntrypointsLookupCollection(
        {name: EntrypointsLookup(cfg) for name, cfg in config.builds.items()},
        config.default_build,
    )
    builders = TagBuilderCollection(
        {name: TagBuilder.from_config(cfg) for name, cfg in config.builds.items()},
        config.default_build,
    )
    return EntrypointRenderer(
        lookups,
        builders,
        absolute_url=config.absolute_url,
        preload=config.preload,
        **kwargs,
    )


@lru_cache(maxsize=1)
def get_renderer() -> EntrypointRenderer:
    return build_renderer(get_config())


@receiver(setting_changed)
def _reset_renderer_on_settings_change(sender, setting, **kwargs):
    if setting == "VITE_ASSETS":
        get_renderer.cache_clear()
