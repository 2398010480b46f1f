"""Affiche le contenu résolu d'un entrypoints.json (mode, serveur, fichiers par entrée)."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.assets.exceptions import ViteAssetsError
from apps.assets.renderer import get_renderer


class Command(BaseCommand):
    help = "List entry points and their files for a Vite build."

    def add_arguments(self, parser):
        parser.add_argument(
            "--build",
            default=None,
            dest="build",
            help="Build name from VITE_ASSETS['builds'] (default: default build).",
        )

    def handle(self, *args, **options):
        renderer = get_renderer()
        build = options.get("build")
        try:
            lookup = renderer.lookups.get(build)
            mode = renderer.get_mode(build)
        except ViteAssetsError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(f"build: {build or renderer.lookups.default_build}")
        self.stdout.write(f"file: {lookup.path}")
        if mode is None:
            self.stdout.write(self.style.WARNING("no entrypoints file (nothing to render)"))
            return

        self.stdout.write(f"mode: {mode}")
        self.stdout.write(f"base: {lookup.base()}")
        self.stdout.write(f"dev server: {lookup.vite_server() or '-'}")
        self.stdout.write(f"legacy: {'on' if lookup.is_legacy_plugin_enabled() else 'off'}")

        for name in lookup.entry_names():
            self.stdout.write(self.style.SUCCESS(name))
            for label, files in (
                ("js", lookup.js_files(name)),
                ("css", lookup.css_files(name)),
                ("preload", lookup.js_dependencies(name)),
                ("dynamic", lookup.js_dynamic_dependencies(name)),
            ):
                for file_path in files:
                    digest = lookup.file_hash(file_path)
                    suffix = f"  [{digest}]" if digest else ""
                    self.stdout.write(f"  {label:<8} {file_path}{suffix}")
            if lookup.has_legacy(name):
                self.stdout.write(f"  {'legacy':<8} {lookup.legacy_js_file(name)}")
