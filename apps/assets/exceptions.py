# apps/assets/exceptions.py
from __future__ import annotations


class ViteAssetsError(Exception):
    """Erreur de base du rendu des assets Vite."""


class EntrypointsFileError(ViteAssetsError):
    """Fichier entrypoints.json présent mais illisible (JSON ou schéma invalide)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Fichier entrypoints invalide: {path} ({reason})")
        self.path = path
        self.reason = reason


class EntrypointNotFoundError(ViteAssetsError, KeyError):
    """Entrée absente du fichier entrypoints (mode strict uniquement)."""

    def __init__(self, entry_name: str, path: str, available: list[str] | None = None):
        super().__init__(entry_name)
        self.entry_name = entry_name
        self.path = path
        self.available = list(available or [])

    def __str__(self) -> str:  # pragma: no cover - string repr helper
        known = ", ".join(self.available) or "-"
        return f"Entry point '{self.entry_name}' introuvable dans {self.path}. Connues: {known}"


class UnknownBuildError(ViteAssetsError, KeyError):
    """Nom de build inconnu dans settings.VITE_ASSETS['builds']."""

    def __init__(self, build: str, known: list[str] | None = None):
        super().__init__(build)
        self.build = build
        self.known = list(known or [])

    def __str__(self) -> str:  # pragma: no cover - string repr helper
        return f"Build '{self.build}' inconnu. Connus: {self.known}"
