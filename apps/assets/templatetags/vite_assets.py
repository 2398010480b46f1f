# apps/assets/templatetags/vite_assets.py
from __future__ import annotations

from typing import Any, Dict, Optional

from django import template
from django.utils.safestring import mark_safe

from apps.assets.renderer import get_renderer

register = template.Library()


def _attrs(attr: Optional[Dict[str, Any]], extra: Dict[str, Any]) -> Dict[str, Any]:
    """attr=dict puis kwargs libres (data-turbo-track="reload"...), les kwargs gagnent."""
    merged = dict(attr or {})
    merged.update(extra)
    return merged


@register.simple_tag(takes_context=True)
def vite_entry_script_tags(
    context,
    entry_name: str,
    build: Optional[str] = None,
    dependency: Optional[str] = None,
    absolute_url: bool = False,
    attr: Optional[Dict[str, Any]] = None,
    **attrs,
):
    """
    Usage : {% vite_entry_script_tags "app" dependency="react" defer=True %}
    """
    return get_renderer().render_scripts(
        entry_name,
        build=build,
        dependency=dependency,
        absolute_url=absolute_url,
        attr=_attrs(attr, attrs),
        request=context.get("request"),
    )


@register.simple_tag(takes_context=True)
def vite_entry_link_tags(
    context,
    entry_name: str,
    build: Optional[str] = None,
    absolute_url: bool = False,
    preload_dynamic_imports: bool = False,
    attr: Optional[Dict[str, Any]] = None,
    **attrs,
):
    return get_renderer().render_links(
        entry_name,
        build=build,
        absolute_url=absolute_url,
        preload_dynamic_imports=preload_dynamic_imports,
        attr=_attrs(attr, attrs),
        request=context.get("request"),
    )


@register.simple_tag
def vite_entry_lazy_link_tags(entry_name: str, build: Optional[str] = None):
    return mark_safe(get_renderer().render_lazy_links(entry_name, build=build))


@register.simple_tag
def vite_entry_inline_styles(entry_name: str, build: Optional[str] = None):
    return mark_safe(get_renderer().render_inline_styles(entry_name, build=build))


@register.simple_tag
def vite_mode(build: Optional[str] = None):
    return get_renderer().get_mode(build) or ""
