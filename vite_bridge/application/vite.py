"""
The `Vite` session: one resolved mode, one optional manifest, one list of
entrypoints, from which every tag and asset URL is produced.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import httpx

from vite_bridge.application.mode import discover_mode
from vite_bridge.domain.assets import render, resolve_app_url, resolve_prefix
from vite_bridge.domain.models import Asset, ViteMode
from vite_bridge.infrastructure.config import DEFAULT_DEV_SERVER_HOST, ViteConfig
from vite_bridge.infrastructure.exceptions import ManifestError
from vite_bridge.infrastructure.heartbeat import CLIENT_SCRIPT_PATH
from vite_bridge.infrastructure.logging import LogContext, get_logger
from vite_bridge.infrastructure.manifest import Manifest

logger = get_logger(__name__)

REACT_REFRESH_TEMPLATE = """<script type="module">
    import RefreshRuntime from '{host}/@react-refresh'
    RefreshRuntime.injectIntoGlobalHook(window)
    window.$RefreshReg$ = () => {{}}
    window.$RefreshSig$ = () => (type) => type
    window.__vite_plugin_react_preamble_installed__ = true
</script>"""


class Vite:
    """
    Resolved Vite integration for one application.

    Build it with `await Vite.create(config)`; the instance is read-only
    afterwards and can be shared between request handlers.

    Example:
        >>> config = ViteConfig(
        ...     manifest_path="tests/fixtures/test-manifest.json",
        ...     entrypoints=["views/foo.js"],
        ...     force_mode=ViteMode.MANIFEST,
        ... )
        >>> vite = await Vite.create(config)
        >>> print(vite.get_tags())
    """

    def __init__(
        self,
        mode: ViteMode,
        entrypoints: Sequence[str],
        manifest: Manifest | None = None,
        dev_server_host: str = DEFAULT_DEV_SERVER_HOST,
        prefix: str | None = None,
        app_url: str = "",
    ):
        self._mode = mode
        self._entrypoints = tuple(entrypoints)
        self._manifest = manifest
        self._dev_server_host = dev_server_host.rstrip("/")
        self._prefix = prefix
        self._app_url = app_url

    @classmethod
    async def create(
        cls,
        config: ViteConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Vite:
        """
        Resolve the mode, load the manifest if needed and pick entrypoints.

        The manifest is loaded in manifest mode, and in development mode when
        no entrypoints are configured (they are then read from it).

        Raises:
            ManifestError: If a manifest is needed but none is configured,
                or it cannot be loaded
        """
        dev_host = config.server_host.rstrip("/")

        if config.force_mode is not None:
            mode = config.force_mode
        else:
            mode = await discover_mode(
                config.use_heart_beat_check,
                config.enable_dev_server,
                dev_host,
                config.heart_beat_retries_limit,
                config.heart_beat_timeout,
                transport=transport,
            )

        manifest: Manifest | None = None
        if mode is ViteMode.MANIFEST or config.entrypoints is None:
            if not config.manifest_path:
                raise ManifestError(
                    f"Tried to start Vite in {mode.value} mode, but no manifest file has been set."
                )
            with LogContext(mode=mode.value, manifest_path=config.manifest_path):
                manifest = Manifest.load(config.manifest_path)

        if config.entrypoints is not None:
            entrypoints = list(config.entrypoints)
        else:
            entrypoints = manifest.entries() if manifest is not None else []

        vite = cls(
            mode=mode,
            entrypoints=entrypoints,
            manifest=manifest,
            dev_server_host=dev_host,
            prefix=resolve_prefix(config.prefix),
            app_url=resolve_app_url(config.app_url),
        )
        logger.info(f"Vite started in {mode.value} mode with {len(entrypoints)} entrypoint(s)")
        return vite

    @property
    def mode(self) -> ViteMode:
        return self._mode

    @property
    def entrypoints(self) -> tuple[str, ...]:
        return self._entrypoints

    @property
    def manifest(self) -> Manifest | None:
        return self._manifest

    @property
    def prefix(self) -> str | None:
        return self._prefix

    @property
    def app_url(self) -> str:
        return self._app_url

    def _require_manifest(self, action: str) -> Manifest:
        if self._manifest is None:
            raise ManifestError(f"Tried to {action} from manifest, but there is no manifest file.")
        return self._manifest

    def get_tags(self) -> str:
        """
        Generate asset tags for the entrypoints from the manifest.

        Raises:
            ManifestError: If no manifest is loaded
        """
        manifest = self._require_manifest("get html tags")
        return manifest.generate_html_tags(self._entrypoints, self._prefix, self._app_url)

    def get_development_scripts(self) -> str:
        """Tags loading each entrypoint straight from the dev server."""
        tags = []
        for entry in self._entrypoints:
            url = f"{self._dev_server_host}/{_normalize_asset_path(entry)}"
            asset = Asset.style_sheet(url) if entry.endswith(".css") else Asset.entry_point(url)
            tags.append(render(asset))
        return "\n".join(tags)

    def get_resolved_vite_scripts(self) -> str:
        """Development scripts plus the HMR client, or manifest tags, by mode."""
        if self._mode is ViteMode.DEVELOPMENT:
            return f"{self.get_development_scripts()}\n{self.get_hmr_script()}"
        return self.get_tags()

    def get_hmr_script(self) -> str:
        """The HMR client script tag in development mode, '' otherwise."""
        if self._mode is ViteMode.DEVELOPMENT:
            return f'<script type="module" src="{self._dev_server_host}/{CLIENT_SCRIPT_PATH}"></script>'
        return ""

    def get_asset_url(self, path: str) -> str:
        """
        URL of an asset given its source path, e.g. "/src/assets/logo.svg".

        In manifest mode an asset missing from the manifest yields ''.

        Raises:
            ManifestError: In manifest mode, if no manifest is loaded
        """
        path = _normalize_asset_path(path)

        if self._mode is ViteMode.DEVELOPMENT:
            return f"{self._dev_server_host}/{path}"

        manifest = self._require_manifest("get asset's URL")
        return manifest.get_asset_url(path, self._prefix, self._app_url)

    def get_react_script(self) -> str:
        """React fast-refresh preamble pointing at the dev server."""
        return REACT_REFRESH_TEMPLATE.format(host=self._dev_server_host)

    def get_hash(self) -> str | None:
        """Hex MD5 of the manifest file, usable for asset versioning."""
        if self._manifest is None:
            return None
        return self._manifest.hash

    def get_dev_server_url(self) -> str:
        return self._dev_server_host

    def __repr__(self) -> str:
        return (
            f"Vite(mode={self._mode.value!r}, entrypoints={list(self._entrypoints)!r}, "
            f"manifest={self._manifest!r})"
        )


def _normalize_asset_path(path: str) -> str:
    return path.removeprefix("/").replace("'", "").replace('"', "")


def resolve_manifest(
    manifest_path: str | Path,
    entrypoints: Sequence[str],
    prefix: str | None = None,
    app_url: str | None = None,
) -> str:
    """
    Load a manifest and render tags for `entrypoints` in one call.

    No mode discovery happens; this is for build scripts and static pages.

    Raises:
        ManifestError: If the manifest cannot be loaded
    """
    manifest = Manifest.load(manifest_path)
    return manifest.generate_html_tags(
        entrypoints, resolve_prefix(prefix), resolve_app_url(app_url)
    )
