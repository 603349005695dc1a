"""In-process LibreSpeed server and fake clock shared by the HTTP tests."""

import json
from typing import Dict, List, Tuple

from aiohttp import web
from aiohttp.test_utils import AioHTTPTestCase

IDENTITY_PAYLOAD = {
    "processedString": "203.0.113.7 - Example Broadband, NL",
    "rawIspInfo": {
        "organization": "AS64500 Example Broadband B.V.",
        "country": "NL",
        "location": "52.3740,4.8897",
    },
}


class FakeClock:
    """Integer-nanosecond clock advanced by the mock server handlers."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += int(round(ms * 1_000_000))


class FakeSleep:
    """Records pauses and moves the clock forward without really sleeping."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.clock.advance_ms(seconds * 1000)


class MockLibrespeedServer:
    """Canned responses for the four LibreSpeed endpoints."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock

        self.identity_body = json.dumps(IDENTITY_PAYLOAD)
        self.identity_status = 200

        self.ping_delays_ms: List[float] = [12.0, 15.0, 11.0, 18.0, 14.0]
        self.ping_statuses: Dict[int, int] = {}
        self.ping_calls = 0

        self.download_delay_ms = 500.0
        self.download_status = 200
        self.download_body_size = 4096
        self.download_queries: List[str] = []

        self.upload_delay_ms = 250.0
        self.upload_status = 200
        self.uploads: List[Tuple[str, bytes]] = []

    def make_app(self) -> web.Application:
        app = web.Application(client_max_size=8 * 1024 * 1024)
        app.router.add_get("/getIP", self._get_ip)
        app.router.add_get("/empty", self._ping)
        app.router.add_post("/empty", self._upload)
        app.router.add_get("/garbage", self._garbage)
        return app

    async def _get_ip(self, request: web.Request) -> web.Response:
        assert request.query.get("isp") == "true"
        if self.identity_status != 200:
            return web.Response(status=self.identity_status)
        return web.Response(text=self.identity_body, content_type="application/json")

    async def _ping(self, request: web.Request) -> web.Response:
        index = self.ping_calls
        self.ping_calls += 1
        self.clock.advance_ms(self.ping_delays_ms[index % len(self.ping_delays_ms)])
        return web.Response(status=self.ping_statuses.get(index, 200))

    async def _garbage(self, request: web.Request) -> web.Response:
        self.download_queries.append(request.query_string)
        self.clock.advance_ms(self.download_delay_ms)
        if self.download_status != 200:
            return web.Response(status=self.download_status)
        return web.Response(
            body=b"\x00" * self.download_body_size,
            content_type="application/octet-stream",
        )

    async def _upload(self, request: web.Request) -> web.Response:
        body = await request.read()
        self.uploads.append((request.content_type, body))
        self.clock.advance_ms(self.upload_delay_ms)
        return web.Response(status=self.upload_status)


class LibrespeedTestCase(AioHTTPTestCase):
    """Serves ``MockLibrespeedServer`` and hands tests a fake clock and sleep."""

    async def get_application(self) -> web.Application:
        self.clock = FakeClock()
        self.sleep = FakeSleep(self.clock)
        self.mock = MockLibrespeedServer(self.clock)
        return self.mock.make_app()

    @property
    def base_url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"
