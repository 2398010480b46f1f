# apps/assets/conf.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from django.conf import settings

DEFAULT_BUILD = "_default"
PRELOAD_LINK_TAG = "link-tag"
PRELOAD_LINK_HEADER = "link-header"
PRELOAD_NONE = "none"
KNOWN_PRELOAD_STRATEGIES = (PRELOAD_LINK_TAG, PRELOAD_LINK_HEADER, PRELOAD_NONE)

# Emplacement écrit par le plugin bundler (vite-plugin-symfony >= 5)
ENTRYPOINTS_RELPATH = Path(".vite") / "entrypoints.json"


@dataclass(frozen=True)
class BuildConfig:
    name: str
    build_dir: str
    public_dir: Path
    entrypoints_path: Path
    throw_on_missing_entry: bool = False
    crossorigin: Union[bool, str] = False
    script_attributes: Dict[str, Any] = field(default_factory=dict)
    link_attributes: Dict[str, Any] = field(default_factory=dict)
    preload_attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ViteAssetsConfig:
    default_build: str
    builds: Dict[str, BuildConfig]
    absolute_url: bool = False
    preload: str = PRELOAD_LINK_TAG


def _build(name: str, raw: Optional[dict]) -> BuildConfig:
    raw = raw or {}
    public_dir = Path(raw.get("public_dir") or Path(settings.BASE_DIR) / "public")
    build_dir = str(raw.get("build_dir") or "build").strip("/")
    entrypoints = raw.get("entrypoints_path")
    entrypoints_path = Path(entrypoints) if entrypoints else public_dir / build_dir / ENTRYPOINTS_RELPATH
    return BuildConfig(
        name=name,
        build_dir=build_dir,
        public_dir=public_dir,
        entrypoints_path=entrypoints_path,
        throw_on_missing_entry=bool(raw.get("throw_on_missing_entry", False)),
        crossorigin=raw.get("crossorigin", False) or False,
        script_attributes=dict(raw.get("script_attributes") or {}),
        link_attributes=dict(raw.get("link_attributes") or {}),
        preload_attributes=dict(raw.get("preload_attributes") or {}),
    )


def get_config() -> ViteAssetsConfig:
    """
    Lit settings.VITE_ASSETS. Sans bloc "builds", un build unique
    "_default" est déduit des clés de premier niveau (build_dir, public_dir...).
    """
    c = getattr(settings, "VITE_ASSETS", {}) or {}
    raw_builds = c.get("builds") or {DEFAULT_BUILD: c}
    builds = {str(name): _build(str(name), raw) for name, raw in raw_builds.items()}
    default_build = str(c.get("default_build") or DEFAULT_BUILD)
    if default_build not in builds and len(builds) == 1:
        default_build = next(iter(builds))
    return ViteAssetsConfig(
        default_build=default_build,
        builds=builds,
        absolute_url=bool(c.get("absolute_url", False)),
        preload=str(c.get("preload") or PRELOAD_LINK_TAG).strip().lower(),
    )
