# apps/assets/manifest/loader.py
from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..exceptions import EntrypointsFileError
from .schema import EntrypointsFile

log = logging.getLogger("assets.manifest")

# -------------------------
# Helpers
# -------------------------

def _file_mtime_sig(path: str) -> float:
    try:
        st = os.stat(path)
        # On arrondit pour stabilité (certaines FS ont une faible résolution)
        return round(st.st_mtime, 3)
    except FileNotFoundError:
        return -1.0


def _read_json(path: str) -> dict:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)

# -------------------------
# Cache interne
# -------------------------

@lru_cache(maxsize=32)
def _load_cached(path: str, mtime_sig: float) -> EntrypointsFile:
    """
    NE PAS appeler directement : passez par load_entrypoints().
    La clé de cache inclut (path, mtime_sig) => reload implicite si le bundler réécrit le fichier.
    """
    try:
        raw = _read_json(path)
    except json.JSONDecodeError as e:
        raise EntrypointsFileError(path, f"JSON invalide: {e}") from e

    if not isinstance(raw, dict):
        raise EntrypointsFileError(path, f"objet JSON attendu, reçu {type(raw).__name__}")

    try:
        content = EntrypointsFile.model_validate(raw)
    except ValidationError as e:
        raise EntrypointsFileError(path, str(e)) from e

    log.debug("entrypoints loaded: %s (%d entries, build=%s)", path, len(content.entry_points), content.is_build())
    return content


def invalidate_entrypoints_cache() -> None:
    """Vide explicitement le cache LRU (tests, commandes)."""
    _load_cached.cache_clear()

# -------------------------
# API publique
# -------------------------

def load_entrypoints(path: Path | str, *, reload: bool = False) -> Optional[EntrypointsFile]:
    """
    Charge et valide un entrypoints.json.
    - None si le fichier n'existe pas (aucune donnée de manifest, pas une erreur).
    - EntrypointsFileError si le fichier existe mais est invalide.
    """
    path = str(path)
    mtime_sig = _file_mtime_sig(path)
    if mtime_sig < 0:
        return None

    if reload:
        invalidate_entrypoints_cache()

    return _load_cached(path, mtime_sig)
