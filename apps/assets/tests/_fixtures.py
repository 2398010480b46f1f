from __future__ import annotations

import copy
import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from django.test import SimpleTestCase, override_settings

from apps.assets.conf import get_config
from apps.assets.manifest.loader import invalidate_entrypoints_cache
from apps.assets.renderer import EntrypointRenderer, build_renderer

DEV_SERVER = "http://127.0.0.1:5173"


def _entry(js=(), css=(), preload=(), dynamic=(), legacy: Any = False) -> Dict[str, Any]:
    return {"js": list(js), "css": list(css), "preload": list(preload), "dynamic": list(dynamic), "legacy": legacy}


BUILD_PAYLOAD: Dict[str, Any] = {
    "base": "/build/",
    "entryPoints": {
        "app": _entry(
            js=["/build/assets/app-a1.js"],
            css=["/build/assets/app-c1.css"],
            preload=["/build/assets/vendor-v1.js"],
            dynamic=["/build/assets/lazy-d1.js"],
        ),
        "admin": _entry(
            js=["/build/assets/admin-a2.js", "/build/assets/vendor-v1.js"],
            css=["/build/assets/app-c1.css", "/build/assets/admin-c2.css"],
            preload=["/build/assets/vendor-v1.js"],
        ),
    },
    "legacy": False,
    "metadatas": {
        "/build/assets/app-a1.js": {"hash": "sha256-appjs"},
        "/build/assets/app-c1.css": {"hash": "sha256-appcss"},
        "/build/assets/vendor-v1.js": {"hash": "sha256-vendor"},
    },
    "viteServer": None,
}

DEV_PAYLOAD: Dict[str, Any] = {
    "base": "/build/",
    "entryPoints": {
        "app": _entry(
            js=[f"{DEV_SERVER}/build/assets/app.js"],
            dynamic=[f"{DEV_SERVER}/build/assets/lazy.js"],
        ),
        "admin": _entry(js=[f"{DEV_SERVER}/build/assets/admin.js"]),
    },
    "legacy": False,
    "metadatas": {},
    "viteServer": DEV_SERVER,
}

LEGACY_PAYLOAD: Dict[str, Any] = {
    "base": "/build/",
    "entryPoints": {
        "MyEntry": _entry(js=["/build/assets/my-entry-1.js"], legacy="MyEntry-legacy"),
        "MyEntry-legacy": _entry(js=["/build/assets/my-entry-legacy-2.js"]),
        "polyfills-legacy": _entry(js=["/build/assets/polyfills-legacy-3.js"]),
    },
    "legacy": True,
    "metadatas": {"/build/assets/my-entry-legacy-2.js": {"hash": "sha256-legacy"}},
    "viteServer": None,
}


def payload(base: Dict[str, Any], **changes: Any) -> Dict[str, Any]:
    data = copy.deepcopy(base)
    data.update(changes)
    return data


class EntrypointsTestCase(SimpleTestCase):
    """Répertoire public temporaire + helpers pour écrire un entrypoints.json."""

    def setUp(self) -> None:
        super().setUp()
        self._tmp = Path(tempfile.mkdtemp(prefix="vite-assets-"))
        self.public_dir = self._tmp / "public"
        self.entrypoints_path = self.public_dir / "build" / ".vite" / "entrypoints.json"
        invalidate_entrypoints_cache()

    def tearDown(self) -> None:
        invalidate_entrypoints_cache()
        shutil.rmtree(self._tmp, ignore_errors=True)
        super().tearDown()

    def write_entrypoints(self, data: Dict[str, Any], path: Optional[Path] = None) -> Path:
        target = path or self.entrypoints_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data), encoding="utf-8")
        return target

    def write_public_file(self, url_path: str, content: str) -> Path:
        target = self.public_dir / url_path.lstrip("/")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def vite_settings(self, *, preload: str = "link-tag", absolute_url: bool = False, **build: Any) -> Dict[str, Any]:
        return {
            "default_build": "_default",
            "builds": {"_default": {"public_dir": self.public_dir, "build_dir": "build", **build}},
            "absolute_url": absolute_url,
            "preload": preload,
        }

    def make_renderer(
        self,
        data: Optional[Dict[str, Any]] = None,
        *,
        preload: str = "link-tag",
        absolute_url: bool = False,
        on_tag=None,
        **build: Any,
    ) -> EntrypointRenderer:
        if data is not None:
            self.write_entrypoints(data)
        with override_settings(VITE_ASSETS=self.vite_settings(preload=preload, absolute_url=absolute_url, **build)):
            config = get_config()
        kwargs = {"on_tag": on_tag} if on_tag is not None else {}
        return build_renderer(config, **kwargs)
