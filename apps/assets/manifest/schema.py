# apps/assets/manifest/schema.py
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EntryPointConfig(BaseModel):
    js: List[str] = []
    css: List[str] = []
    # modulepreload des imports statiques
    preload: List[str] = []
    # imports dynamiques (préchargés seulement sur demande)
    dynamic: List[str] = []
    # nom de l'entrée legacy associée, ou false
    legacy: Union[str, bool, None] = False


class FileMetadata(BaseModel):
    hash: Optional[str] = None


class ViteServerConfig(BaseModel):
    origin: str
    base: Optional[str] = None


class EntrypointsFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base: str = "/"
    entry_points: Dict[str, EntryPointConfig] = Field(default_factory=dict, alias="entryPoints")
    legacy: bool = False
    metadatas: Dict[str, FileMetadata] = {}
    vite_server: Union[str, ViteServerConfig, None] = Field(default=None, alias="viteServer")
    is_prod: Optional[bool] = Field(default=None, alias="isProd")

    def server_origin(self) -> Optional[str]:
        if isinstance(self.vite_server, ViteServerConfig):
            return self.vite_server.origin
        return self.vite_server or None

    def is_build(self) -> bool:
        if self.is_prod is not None:
            return self.is_prod
        return self.server_origin() is None
