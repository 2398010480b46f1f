# apps/assets/tags/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

SCRIPT_TAG = "script"
LINK_TAG = "link"


@dataclass(eq=False)
class Tag:
    """
    Élément HTML à émettre (script ou link).
    Mutable : un observateur de `render_asset_tag` peut ajuster les attributs
    avant sérialisation. Le renderer réutilise la même instance pour un chemin donné.
    """

    tag_name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    content: str = ""

    def is_script_tag(self) -> bool:
        return self.tag_name == SCRIPT_TAG

    def is_link_tag(self) -> bool:
        return self.tag_name == LINK_TAG

    def is_stylesheet(self) -> bool:
        return self.is_link_tag() and self.attributes.get("rel") == "stylesheet"

    def is_module_preload(self) -> bool:
        return self.is_link_tag() and self.attributes.get("rel") == "modulepreload"

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> "Tag":
        self.attributes[name] = value
        return self

    def remove_attribute(self, name: str) -> "Tag":
        self.attributes.pop(name, None)
        return self

    @property
    def url(self) -> str:
        """src pour un script, href pour un link ("" si inline)."""
        key = "href" if self.is_link_tag() else "src"
        return str(self.attributes.get(key) or "")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Tag {self.tag_name} {self.attributes!r}>"
