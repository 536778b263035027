from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from vite_bridge.domain.models import ViteMode


class ViteStatus(BaseModel):
    mode: ViteMode
    dev_server_url: str
    entrypoints: list[str]
    manifest_hash: Optional[str] = None
    prefix: Optional[str] = None
    app_url: str = ""


class AssetUrl(BaseModel):
    path: str
    url: str
