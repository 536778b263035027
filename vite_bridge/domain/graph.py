"""
Entrypoint graph resolution.

Walks the static imports of each requested entrypoint and collects every
asset the page needs up front. The discovered set belongs to a single call;
a chunk is only expanded the first time its asset is inserted, which is what
makes cyclic imports terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from vite_bridge.domain.assets import render
from vite_bridge.domain.models import Asset, Chunk, resolve_path

logger = logging.getLogger(__name__)


def _insert(discovered: set[Asset], asset: Asset) -> bool:
    if asset in discovered:
        return False
    discovered.add(asset)
    return True


def _expand(
    chunks: Mapping[str, Chunk],
    chunk: Chunk,
    discovered: set[Asset],
    prefix: str | None,
    app_url: str,
) -> None:
    for asset in chunk.iter_assets(prefix, app_url):
        _insert(discovered, asset)

    # Dynamic imports are fetched by the running app, never preloaded.
    if not chunk.is_entry:
        return

    for key in chunk.imports:
        imported = chunks.get(key)
        if imported is None:
            logger.error(f'Skipping unknown import "{key}" of chunk "{chunk.file}".')
            continue

        if _insert(discovered, Asset.pre_load(resolve_path(imported.file, prefix, app_url))):
            _expand(chunks, imported, discovered, prefix, app_url)


def discover_assets(
    chunks: Mapping[str, Chunk],
    entrypoints: Iterable[str],
    prefix: str | None = None,
    app_url: str = "",
) -> set[Asset]:
    """
    Collect the closure of assets reachable from the given entrypoints.

    Missing entrypoints are logged and skipped so that a manifest lagging
    behind configuration still renders what it can.
    """
    discovered: set[Asset] = set()

    for entry in entrypoints:
        chunk = chunks.get(entry)
        if chunk is None:
            logger.error(f'Skipping invalid or unexisting entry "{entry}".')
            continue

        path = resolve_path(chunk.file, prefix, app_url)
        entry_asset = Asset.style_sheet(path) if entry.endswith(".css") else Asset.entry_point(path)

        if _insert(discovered, entry_asset):
            _expand(chunks, chunk, discovered, prefix, app_url)

    return discovered


def generate_html_tags(
    chunks: Mapping[str, Chunk],
    entrypoints: Iterable[str],
    prefix: str | None = None,
    app_url: str = "",
) -> str:
    """Render stylesheets, then entry scripts, then preloads, each group sorted by path."""
    if not chunks:
        logger.error("Manifest is empty; no tags generated.")
        return ""

    assets = sorted(discover_assets(chunks, entrypoints, prefix, app_url), key=Asset.sort_key)
    tags = (render(asset) for asset in assets)
    return "\n".join(tag for tag in tags if tag)
