from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import override_settings

from apps.assets.tests._fixtures import BUILD_PAYLOAD, LEGACY_PAYLOAD, EntrypointsTestCase


class ViteEntrypointsCommandTest(EntrypointsTestCase):
    def run_command(self, *args) -> str:
        out = StringIO()
        call_command("vite_entrypoints", *args, stdout=out)
        return out.getvalue()

    def test_lists_entries(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            output = self.run_command()
        self.assertIn("mode: build", output)
        self.assertIn("js       /build/assets/app-a1.js  [sha256-appjs]", output)
        self.assertIn("dynamic  /build/assets/lazy-d1.js", output)

    def test_legacy_file_listed(self) -> None:
        self.write_entrypoints(LEGACY_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            output = self.run_command()
        self.assertIn("legacy: on", output)
        self.assertIn("legacy   /build/assets/my-entry-legacy-2.js", output)

    def test_missing_file(self) -> None:
        with override_settings(VITE_ASSETS=self.vite_settings()):
            output = self.run_command()
        self.assertIn("no entrypoints file", output)

    def test_unknown_build(self) -> None:
        with override_settings(VITE_ASSETS=self.vite_settings()):
            with self.assertRaises(CommandError):
                self.run_command("--build", "admin")
