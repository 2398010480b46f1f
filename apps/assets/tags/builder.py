# apps/assets/tags/builder.py
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from django.forms.utils import flatatt
from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from ..conf import BuildConfig
from ..exceptions import UnknownBuildError
from . import inline
from .model import LINK_TAG, SCRIPT_TAG, Tag

_VOID_ELEMENTS = {LINK_TAG}
# Attributs sans valeur utile quand vides (hash absent du manifest)
_DROP_WHEN_EMPTY = {"integrity"}


def _crossorigin_attrs(crossorigin: Union[bool, str]) -> Dict[str, Any]:
    if crossorigin is True:
        return {"crossorigin": True}
    if isinstance(crossorigin, str) and crossorigin:
        return {"crossorigin": crossorigin}
    return {}


class TagBuilder:
    """
    Fabrique les Tag d'un build. Les attributs par défaut (settings) passent
    en premier, ceux de l'appelant gagnent en cas de conflit.
    """

    def __init__(
        self,
        *,
        script_attributes: Optional[Dict[str, Any]] = None,
        link_attributes: Optional[Dict[str, Any]] = None,
        preload_attributes: Optional[Dict[str, Any]] = None,
        crossorigin: Union[bool, str] = False,
    ):
        cors = _crossorigin_attrs(crossorigin)
        self.script_attributes = {**cors, **(script_attributes or {})}
        self.link_attributes = {**cors, **(link_attributes or {})}
        self.preload_attributes = {**cors, **(preload_attributes or {})}

    @classmethod
    def from_config(cls, config: BuildConfig) -> "TagBuilder":
        return cls(
            script_attributes=config.script_attributes,
            link_attributes=config.link_attributes,
            preload_attributes=config.preload_attributes,
            crossorigin=config.crossorigin,
        )

    # --- bootstrap dev-server ---
    def create_vite_client_script(self, src: str) -> Tag:
        return Tag(SCRIPT_TAG, {"type": "module", "src": src})

    def create_react_refresh_script(self, dev_server_url: str) -> Tag:
        return Tag(SCRIPT_TAG, {"type": "module"}, inline.react_refresh_preamble(dev_server_url))

    # --- bootstrap legacy ---
    def create_detect_modern_browser_script(self) -> Tag:
        return Tag(SCRIPT_TAG, {"type": "module"}, inline.DETECT_MODERN_BROWSER_CODE)

    def create_dynamic_fallback_script(self) -> Tag:
        return Tag(SCRIPT_TAG, {"type": "module"}, inline.DYNAMIC_FALLBACK_CODE)

    def create_safari_no_module_script(self) -> Tag:
        return Tag(SCRIPT_TAG, {"nomodule": True}, inline.SAFARI_NO_MODULE_FIX_CODE)

    # --- fichiers du manifest ---
    def create_script_tag(self, attributes: Dict[str, Any], content: str = "") -> Tag:
        return Tag(SCRIPT_TAG, {**self.script_attributes, **attributes}, content)

    def create_link_stylesheet_tag(self, href: str, attributes: Optional[Dict[str, Any]] = None) -> Tag:
        attrs = {"rel": "stylesheet", "href": href, **self.link_attributes, **(attributes or {})}
        return Tag(LINK_TAG, attrs)

    def create_module_preload_link_tag(self, href: str, attributes: Optional[Dict[str, Any]] = None) -> Tag:
        attrs = {"rel": "modulepreload", "href": href, **self.preload_attributes, **(attributes or {})}
        return Tag(LINK_TAG, attrs)


def generate_tag(tag: Tag) -> SafeString:
    attrs = {
        k: v for k, v in tag.attributes.items()
        if not (k in _DROP_WHEN_EMPTY and v in ("", None))
    }
    if tag.tag_name in _VOID_ELEMENTS:
        return format_html("<{}{}>", tag.tag_name, flatatt(attrs))
    return format_html(
        "<{}{}>{}</{}>",
        tag.tag_name,
        flatatt(attrs),
        mark_safe(tag.content or ""),
        tag.tag_name,
    )


class TagBuilderCollection:
    def __init__(self, builders: Dict[str, TagBuilder], default_build: str):
        self._builders = dict(builders)
        self.default_build = default_build

    def get(self, build: Optional[str] = None) -> TagBuilder:
        name = build or self.default_build
        try:
            return self._builders[name]
        except KeyError:
            raise UnknownBuildError(name, sorted(self._builders)) from None
