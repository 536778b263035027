from __future__ import annotations

import asyncio

import httpx

from vite_bridge.infrastructure.heartbeat import check_heart_beat, heart_beat_url


class RecordingTransport(httpx.MockTransport):
    def __init__(self, respond):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return respond(request)

        super().__init__(handler)


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_heart_beat_url_normalizes_trailing_slash():
    assert heart_beat_url("http://localhost:5173") == "http://localhost:5173/@vite/client"
    assert heart_beat_url("http://localhost:5173/") == "http://localhost:5173/@vite/client"


def test_alive_dev_server():
    transport = RecordingTransport(lambda request: httpx.Response(200, text="// client"))

    assert asyncio.run(check_heart_beat("http://localhost:5173/", transport=transport)) is True
    assert [str(r.url) for r in transport.requests] == ["http://localhost:5173/@vite/client"]
    assert transport.requests[0].method == "GET"


def test_non_200_status_is_a_failure_without_retry():
    transport = RecordingTransport(lambda request: httpx.Response(404))

    assert asyncio.run(check_heart_beat("http://localhost:5173", retries=3, transport=transport)) is False
    assert len(transport.requests) == 1


def test_unreachable_host_is_retried_then_fails():
    transport = RecordingTransport(refuse)

    assert asyncio.run(check_heart_beat("http://localhost:5173", retries=2, transport=transport)) is False
    assert len(transport.requests) == 3


def test_timeouts_are_retried_until_success():
    outcomes = iter(["timeout", "timeout", "ok"])

    def respond(request: httpx.Request) -> httpx.Response:
        if next(outcomes) == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200)

    transport = RecordingTransport(respond)

    assert asyncio.run(check_heart_beat("http://localhost:5173", 0.5, 5, transport=transport)) is True
    assert len(transport.requests) == 3


def test_zero_retries_means_single_attempt():
    transport = RecordingTransport(refuse)

    assert asyncio.run(check_heart_beat("http://localhost:5173", transport=transport)) is False
    assert len(transport.requests) == 1


def test_slow_response_is_cut_off_per_attempt():
    requests: list[httpx.Request] = []

    async def trickle(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        await asyncio.sleep(2)
        return httpx.Response(200)

    async def timed_check() -> tuple[bool, float]:
        loop = asyncio.get_running_loop()
        started = loop.time()
        alive = await check_heart_beat(
            "http://localhost:5173", 0.1, 1, transport=httpx.MockTransport(trickle)
        )
        return alive, loop.time() - started

    alive, elapsed = asyncio.run(timed_check())

    assert alive is False
    assert len(requests) == 2
    assert elapsed < 1.0
