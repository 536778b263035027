"""
``@vite`` directives for plain HTML templates.

Expands, in a template string:

- ``@vite``: the resolved scripts for the current mode
- ``@vite::hmr``: the HMR client script (empty in manifest mode)
- ``@vite::react``: the React fast-refresh preamble (empty in manifest mode)
- ``@vite::asset('path')`` / ``@vite::assets('path')``: an asset URL
"""

from __future__ import annotations

import re

from vite_bridge.application.vite import Vite
from vite_bridge.domain.models import ViteMode
from vite_bridge.infrastructure.exceptions import ViteError
from vite_bridge.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ViteDirectives:
    """Directive expander bound to one `Vite` session."""

    def __init__(self, vite: Vite):
        self.vite = vite
        self._vite_pattern = re.compile(r"([ \t]*)@vite([ \t]*)(\s|$)")
        self._asset_pattern = re.compile(r"""([ \t]*)@vite::assets?\(['"]?(.*?)['"]?\)([ \t]*)""")
        self._hmr_pattern = re.compile(r"([ \t]*)@vite::hmr([ \t]*)")
        self._react_pattern = re.compile(r"([ \t]*)@vite::react([ \t]*)")

    def vite_directive(self, html: str) -> str:
        """
        Expand ``@vite`` to the mode's scripts.

        Raises:
            ManifestError: In manifest mode when no manifest is loaded
        """
        scripts = self.vite.get_resolved_vite_scripts()
        return self._vite_pattern.sub(
            lambda m: f"{m.group(1)}{scripts}{m.group(2)}{m.group(3)}", html
        )

    def assets_url_directive(self, html: str) -> str:
        """Expand ``@vite::asset(...)``; unknown assets become ''."""

        def replace(m: re.Match[str]) -> str:
            try:
                url = self.vite.get_asset_url(m.group(2))
            except ViteError as e:
                logger.warning(f"Could not resolve asset directive {m.group(0).strip()}: {e}")
                url = ""
            return f"{m.group(1)}{url}{m.group(3)}"

        return self._asset_pattern.sub(replace, html)

    def hmr_directive(self, html: str) -> str:
        if self.vite.mode is ViteMode.MANIFEST:
            return self._hmr_pattern.sub("", html)
        script = self.vite.get_hmr_script()
        return self._hmr_pattern.sub(lambda m: f"{m.group(1)}{script}{m.group(2)}", html)

    def react_directive(self, html: str) -> str:
        if self.vite.mode is ViteMode.MANIFEST:
            return self._react_pattern.sub("", html)
        script = self.vite.get_react_script()
        return self._react_pattern.sub(lambda m: f"{m.group(1)}{script}{m.group(2)}", html)

    def render(self, html: str) -> str:
        """Apply every directive; ``@vite`` goes last so its output is not re-scanned."""
        html = self.react_directive(html)
        html = self.hmr_directive(html)
        html = self.assets_url_directive(html)
        return self.vite_directive(html)
