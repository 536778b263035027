"""
HTML rendering of assets.

Maps each resolved asset to the tag that loads it and normalizes the
deployment prefix and application base URL.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from vite_bridge.domain.models import Asset, AssetKind, PreloadKind, preload_kind

APP_URL_ENV = "APP_URL"

_PRELOAD_AS = {
    PreloadKind.CSS: "style",
    PreloadKind.IMAGE: "image",
    PreloadKind.FONT: "font",
    PreloadKind.VIDEO: "video",
    PreloadKind.AUDIO: "audio",
}


def resolve_prefix(prefix: str | None) -> str | None:
    """Strip surrounding slashes; an empty or root prefix means no prefix."""
    if prefix is None or prefix in ("", "/"):
        return None

    prefix = prefix.removeprefix("/").removesuffix("/")
    return prefix or None


def resolve_app_url(app_url: str | None, environ: Mapping[str, str] | None = None) -> str:
    """Drop the trailing slash; fall back to `APP_URL` when unset."""
    if app_url is None:
        env = os.environ if environ is None else environ
        app_url = env.get(APP_URL_ENV, "")

    return app_url.removesuffix("/")


def render(asset: Asset) -> str:
    """Render an asset to its HTML tag; preloads of unknown type render as ''."""
    if asset.kind is AssetKind.STYLESHEET:
        return f'<link rel="stylesheet" href="{asset.path}" />'

    if asset.kind is AssetKind.ENTRYPOINT:
        return f'<script type="module" src="{asset.path}"></script>'

    kind = asset.preload_kind or preload_kind(asset.path)
    if kind is PreloadKind.JAVASCRIPT:
        return f'<link rel="modulepreload" href="{asset.path}" />'
    if kind is PreloadKind.UNKNOWN:
        return ""
    return f'<link rel="preload" as="{_PRELOAD_AS[kind]}" href="{asset.path}" />'
