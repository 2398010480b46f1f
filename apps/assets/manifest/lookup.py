# apps/assets/manifest/lookup.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..conf import BuildConfig
from ..exceptions import EntrypointNotFoundError, UnknownBuildError
from .loader import load_entrypoints
from .schema import EntryPointConfig, EntrypointsFile

log = logging.getLogger("assets.manifest")

# Pseudo-entrée générée par @vitejs/plugin-legacy
POLYFILLS_LEGACY = "polyfills-legacy"


class EntrypointsLookup:
    """
    Lecture d'un entrypoints.json pour un build donné.
    Toutes les méthodes relisent le fichier via le cache (path, mtime) du loader.
    """

    def __init__(self, config: BuildConfig):
        self.config = config

    @property
    def path(self) -> str:
        return str(self.config.entrypoints_path)

    def _content(self) -> Optional[EntrypointsFile]:
        return load_entrypoints(self.config.entrypoints_path)

    def _require(self) -> EntrypointsFile:
        content = self._content()
        if content is None:
            raise FileNotFoundError(f"Fichier entrypoints introuvable: {self.path}")
        return content

    def _entry(self, entry_name: str, *, strict: Optional[bool] = None) -> Optional[EntryPointConfig]:
        content = self._require()
        entry = content.entry_points.get(entry_name)
        if entry is not None:
            return entry

        if strict is None:
            strict = self.config.throw_on_missing_entry
        if strict:
            raise EntrypointNotFoundError(entry_name, self.path, sorted(content.entry_points))
        if entry_name != POLYFILLS_LEGACY:
            log.warning("Entry point '%s' absent de %s", entry_name, self.path)
        return None

    # ---------------------------
    # État global du fichier
    # ---------------------------
    def has_file(self) -> bool:
        return self._content() is not None

    def is_build(self) -> bool:
        return self._require().is_build()

    def vite_server(self) -> Optional[str]:
        return self._require().server_origin()

    def base(self) -> str:
        return self._require().base

    def is_legacy_plugin_enabled(self) -> bool:
        return bool(self._require().legacy)

    def entry_names(self) -> List[str]:
        return list(self._require().entry_points.keys())

    # ---------------------------
    # Par entrée
    # ---------------------------
    def js_files(self, entry_name: str) -> List[str]:
        strict = False if entry_name == POLYFILLS_LEGACY else None
        entry = self._entry(entry_name, strict=strict)
        return list(entry.js) if entry else []

    def css_files(self, entry_name: str) -> List[str]:
        entry = self._entry(entry_name)
        return list(entry.css) if entry else []

    def js_dependencies(self, entry_name: str) -> List[str]:
        entry = self._entry(entry_name)
        return list(entry.preload) if entry else []

    def js_dynamic_dependencies(self, entry_name: str) -> List[str]:
        entry = self._entry(entry_name)
        return list(entry.dynamic) if entry else []

    def has_legacy(self, entry_name: str) -> bool:
        entry = self._entry(entry_name)
        return bool(entry and isinstance(entry.legacy, str) and entry.legacy)

    def legacy_js_file(self, entry_name: str) -> str:
        entry = self._entry(entry_name, strict=True)
        if not entry or not isinstance(entry.legacy, str) or not entry.legacy:
            raise EntrypointNotFoundError(f"{entry_name} (legacy)", self.path)
        legacy_entry = self._entry(entry.legacy, strict=True)
        if not legacy_entry.js:
            raise EntrypointNotFoundError(entry.legacy, self.path)
        return legacy_entry.js[0]

    def file_hash(self, file_path: str) -> Optional[str]:
        meta = self._require().metadatas.get(file_path)
        return meta.hash if meta else None


class EntrypointsLookupCollection:
    def __init__(self, lookups: Dict[str, EntrypointsLookup], default_build: str):
        self._lookups = dict(lookups)
        self.default_build = default_build

    def get(self, build: Optional[str] = None) -> EntrypointsLookup:
        name = build or self.default_build
        try:
            return self._lookups[name]
        except KeyError:
            raise UnknownBuildError(name, sorted(self._lookups)) from None

    def names(self) -> List[str]:
        return list(self._lookups.keys())
