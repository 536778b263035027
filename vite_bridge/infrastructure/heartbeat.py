from __future__ import annotations

import asyncio

import httpx

from vite_bridge.infrastructure.logging import get_logger

logger = get_logger(__name__)

CLIENT_SCRIPT_PATH = "@vite/client"
DEFAULT_TIMEOUT = 10.0


def heart_beat_url(host: str) -> str:
    return f"{host.rstrip('/')}/{CLIENT_SCRIPT_PATH}"


async def check_heart_beat(
    host: str,
    timeout: float | None = None,
    retries: int = 0,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """
    Check the Vite dev server by fetching its HMR client script.

    Each attempt, including reading the body, must finish within `timeout`.
    Transport failures (refused connections, timeouts) are retried up to
    `retries` more times, one after another with no backoff. Any response
    ends the check: only a 200 counts as alive. Never raises.

    Args:
        host: Dev server base URL, e.g. "http://localhost:5173"
        timeout: Per-attempt timeout in seconds (default 10)
        retries: Additional attempts after a transport failure
        transport: Optional httpx transport, used by tests
    """
    url = heart_beat_url(host)
    attempts = max(retries, 0) + 1
    timeout = DEFAULT_TIMEOUT if timeout is None else timeout

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        for attempt in range(1, attempts + 1):
            try:
                response = await asyncio.wait_for(client.get(url), timeout)
            except httpx.InvalidURL as e:
                logger.error(f"Invalid heartbeat-check endpoint {url}: {e}")
                return False
            except httpx.HTTPError as e:
                logger.error(
                    f"Failed to make HTTP request to heartbeat-check endpoint {url} "
                    f"(attempt {attempt}/{attempts}): {e!r}"
                )
                continue
            except asyncio.TimeoutError:
                logger.error(
                    f"Heartbeat-check endpoint {url} did not answer within {timeout}s "
                    f"(attempt {attempt}/{attempts})"
                )
                continue

            if response.status_code != 200:
                logger.warning(f"Heartbeat endpoint {url} answered {response.status_code}")
            return response.status_code == 200

    return False
