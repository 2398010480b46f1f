from __future__ import annotations

import threading

from django.http import HttpResponse
from django.test import RequestFactory, override_settings

from apps.assets.middleware import EntrypointRendererMiddleware, build_link_header
from apps.assets.renderer import get_renderer

from apps.assets.tests._fixtures import BUILD_PAYLOAD, LEGACY_PAYLOAD, EntrypointsTestCase


class EntrypointRendererMiddlewareTest(EntrypointsTestCase):
    def test_each_request_is_a_fresh_page_render(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            first = self.client.get("/")
            second = self.client.get("/")
        for response in (first, second):
            self.assertEqual(response.status_code, 200)
            self.assertContains(response, 'src="/build/assets/app-a1.js"', count=1)
            self.assertContains(response, 'href="/build/assets/app-c1.css"', count=1)
            self.assertContains(response, 'data-vite-mode="build"')
        self.assertNotIn("Link", first)

    def test_link_header_channel(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings(preload="link-header")):
            response = self.client.get("/")
        self.assertNotContains(response, "modulepreload")
        link = response["Link"]
        self.assertIn('</build/assets/vendor-v1.js>; rel="modulepreload"', link)
        self.assertIn('</build/assets/app-a1.js>; rel="modulepreload"', link)
        self.assertIn('</build/assets/app-c1.css>; rel="preload"; as="style"', link)

    def test_state_reset_after_response(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings()):
            def view(request):
                get_renderer().script_tags("app")
                return HttpResponse("ok")

            middleware = EntrypointRendererMiddleware(view)
            middleware(RequestFactory().get("/"))
            self.assertTrue(get_renderer().state.is_empty())

    def test_existing_link_header_kept(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings(preload="link-header")):
            def view(request):
                get_renderer().link_tags("app")
                response = HttpResponse("ok")
                response["Link"] = '</fonts/a.woff2>; rel="preload"; as="font"'
                return response

            response = EntrypointRendererMiddleware(view)(RequestFactory().get("/"))
        self.assertTrue(response["Link"].startswith('</fonts/a.woff2>; rel="preload"; as="font", '))
        self.assertIn("vendor-v1.js", response["Link"])

    def test_legacy_chunks_not_announced(self) -> None:
        renderer = self.make_renderer(LEGACY_PAYLOAD, preload="link-header")
        renderer.script_tags("MyEntry")
        links = build_link_header(renderer)
        self.assertEqual(links, ['</build/assets/my-entry-1.js>; rel="modulepreload"'])

    def test_styles_announced_with_completed_url(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        with override_settings(VITE_ASSETS=self.vite_settings(preload="link-header", absolute_url=True)):
            def view(request):
                get_renderer().link_tags("app", request=request)
                return HttpResponse("ok")

            response = EntrypointRendererMiddleware(view)(RequestFactory().get("/"))
        self.assertIn('<http://testserver/build/assets/app-c1.css>; rel="preload"; as="style"', response["Link"])
        self.assertIn('<http://testserver/build/assets/vendor-v1.js>; rel="modulepreload"', response["Link"])
        self.assertNotIn("</build/", response["Link"])


class ConcurrentRequestsTest(EntrypointsTestCase):
    def test_interleaved_requests_keep_their_own_state(self) -> None:
        self.write_entrypoints(BUILD_PAYLOAD)
        first_rendered = threading.Event()
        second_done = threading.Event()
        bodies = {}

        def first_view(request):
            html = get_renderer().render_scripts("app")
            first_rendered.set()
            second_done.wait(timeout=5)
            return HttpResponse(html)

        def second_view(request):
            first_rendered.wait(timeout=5)
            return HttpResponse(get_renderer().render_scripts("app"))

        def run(name, view, done=None):
            try:
                response = EntrypointRendererMiddleware(view)(RequestFactory().get("/"))
                bodies[name] = response.content.decode()
            finally:
                if done is not None:
                    done.set()

        with override_settings(VITE_ASSETS=self.vite_settings()):
            threads = [
                threading.Thread(target=run, args=("first", first_view)),
                threading.Thread(target=run, args=("second", second_view, second_done)),
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=10)

        self.assertIn('src="/build/assets/app-a1.js"', bodies["first"])
        self.assertIn('src="/build/assets/app-a1.js"', bodies["second"])

    def test_state_not_shared_between_threads(self) -> None:
        renderer = self.make_renderer(BUILD_PAYLOAD)
        renderer.script_tags("app")
        seen = []
        worker = threading.Thread(target=lambda: seen.append(renderer.rendered_scripts))
        worker.start()
        worker.join(timeout=5)
        self.assertEqual(seen, [{}])
        self.assertIn("/build/assets/app-a1.js", renderer.rendered_scripts)
