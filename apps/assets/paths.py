# apps/assets/paths.py
from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlsplit

from django.core.exceptions import SuspiciousFileOperation


class PublicDirResolver:
    """
    Chemin d'URL du manifest (ex: "/build/assets/app.css") -> fichier local
    sous le répertoire public du build.
    """

    def __init__(self, public_dir: Path | str):
        self.public_dir = Path(public_dir)

    def __call__(self, url_path: str) -> Path:
        rel = unquote(urlsplit(url_path).path).lstrip("/")
        root = self.public_dir.resolve()
        target = (root / rel).resolve()
        if target != root and root not in target.parents:
            raise SuspiciousFileOperation(f"Chemin hors du répertoire public: {url_path}")
        return target
