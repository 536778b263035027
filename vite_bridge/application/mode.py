from __future__ import annotations

import os
from collections.abc import Mapping

import httpx

from vite_bridge.domain.models import ViteMode
from vite_bridge.infrastructure.heartbeat import check_heart_beat
from vite_bridge.infrastructure.logging import get_logger

logger = get_logger(__name__)

PRODUCTION_ENV_VARS = ("APP_ENV", "NODE_ENV", "PYTHON_ENV", "ENVIRONMENT")


def is_production(environ: Mapping[str, str] | None = None) -> bool:
    """True if any recognized environment variable is literally "production"."""
    env = os.environ if environ is None else environ
    return any(env.get(name) == "production" for name in PRODUCTION_ENV_VARS)


async def discover_mode(
    use_heart_beat_check: bool,
    enable_dev_server: bool,
    host: str,
    retries: int = 0,
    timeout: float | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ViteMode:
    """
    Decide whether assets come from the dev server or the built manifest.

    1. Heartbeat checking disabled: development.
    2. Dev server disabled: manifest.
    3. A production environment variable set: manifest.
    4. Otherwise development if the dev server answers the heartbeat check.
    """
    if not use_heart_beat_check:
        return ViteMode.DEVELOPMENT

    if not enable_dev_server:
        return ViteMode.MANIFEST

    if is_production(environ):
        logger.info("Production environment detected; using manifest mode.")
        return ViteMode.MANIFEST

    if await check_heart_beat(host, timeout, retries, transport=transport):
        return ViteMode.DEVELOPMENT

    logger.info(f"Vite dev server at {host} is unavailable; using manifest mode.")
    return ViteMode.MANIFEST
