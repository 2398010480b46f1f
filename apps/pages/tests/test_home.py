from __future__ import annotations

from django.test import override_settings
from django.urls import reverse

from apps.assets.tests._fixtures import DEV_PAYLOAD, DEV_SERVER, EntrypointsTestCase


class HomePageTests(EntrypointsTestCase):
    def test_home_without_bundle_still_renders(self) -> None:
        with override_settings(VITE_ASSETS=self.vite_settings()):
            response = self.client.get(reverse("pages:home"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'data-vite-mode="none"')
        self.assertNotContains(response, "<script")
        self.assertIsNone(response.context["vite_mode"])

    def test_home_against_dev_server(self) -> None:
        self.write_entrypoints(DEV_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            response = self.client.get(reverse("pages:home"))
        self.assertContains(response, 'data-vite-mode="dev"')
        self.assertContains(response, f'src="{DEV_SERVER}/build/@vite/client"', count=1)
        self.assertContains(response, f'src="{DEV_SERVER}/build/assets/app.js"', count=1)

    @override_settings(PAGES_HOME_ENTRY="admin")
    def test_entry_name_from_settings(self) -> None:
        self.write_entrypoints(DEV_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            response = self.client.get("/")
        self.assertEqual(response.context["entry_name"], "admin")
        self.assertContains(response, "/build/assets/admin.js")
