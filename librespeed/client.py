"""
Measurement orchestrator.

Runs the four probes in a fixed order -- identity, ping, download,
upload -- against one server and assembles a ``Result``.  The first probe
to fail ends the run with a ``StageError``; there is no partial result.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

import aiohttp

from .api import LibrespeedAPI
from .config import DEFAULT_SETTINGS, ProbeSettings
from .constants import DEFAULT_BASE_URL
from .download import DownloadTester
from .errors import SpeedtestError, Stage, StageError
from .latency import Clock, LatencyTester, Sleep
from .logger import log
from .upload import UploadTester

T = TypeVar("T")


@dataclass(frozen=True)
class Result:
    """Outcome of one complete test run."""

    download_speed_mbps: float
    upload_speed_mbps: float
    ping_ms: float
    jitter_ms: float
    isp: str
    ip: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LibrespeedClient:
    """
    Speed-test client bound to one server.

    Use as an async context manager so the underlying HTTP session is
    opened once and reused by every probe::

        async with LibrespeedClient("http://localhost:8989") as client:
            result = await client.run_test()

    ``clock`` (integer nanoseconds) and ``sleep`` exist for tests; the
    defaults are ``time.perf_counter_ns`` and ``asyncio.sleep``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        settings: ProbeSettings = DEFAULT_SETTINGS,
        session: Optional[aiohttp.ClientSession] = None,
        clock: Clock = time.perf_counter_ns,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.api = LibrespeedAPI(base_url, settings=settings, session=session)
        self.latency = LatencyTester(self.api, clock=clock, sleep=sleep)
        self.download = DownloadTester(self.api, clock=clock)
        self.upload = UploadTester(self.api, clock=clock)
        self.on_stage: Optional[Callable[[Stage], None]] = None

    @property
    def base_url(self) -> str:
        return self.api.base_url

    # -- Context manager ----------------------------------------------------

    async def __aenter__(self) -> LibrespeedClient:
        await self.api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.api.__aexit__(exc_type, exc_val, exc_tb)

    # -- Orchestration ------------------------------------------------------

    async def _run_stage(self, stage: Stage, probe: Callable[[], Awaitable[T]]) -> T:
        if self.on_stage:
            self.on_stage(stage)
        log.debug("stage %s started", stage.value)
        try:
            return await probe()
        except SpeedtestError as exc:
            log.debug("stage %s failed: %s", stage.value, exc)
            raise StageError(stage, exc) from exc

    async def run_test(self) -> Result:
        """Run every probe in order and return the combined result."""
        identity = await self._run_stage(Stage.IDENTITY, self.api.get_identity)
        ping = await self._run_stage(Stage.PING, self.latency.test)
        download = await self._run_stage(Stage.DOWNLOAD, self.download.test)
        upload = await self._run_stage(Stage.UPLOAD, self.upload.test)

        result = Result(
            download_speed_mbps=download.speed_mbps,
            upload_speed_mbps=upload.speed_mbps,
            ping_ms=ping.latency_ms,
            jitter_ms=ping.jitter_ms,
            isp=identity.isp,
            ip=identity.ip,
        )
        log.debug("test against %s complete: %s", self.base_url, result)
        return result
