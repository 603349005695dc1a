"""
HTTP latency measurement against the ``/empty`` endpoint.

Each ping is one ``GET /empty`` timed from request issue until the
response body has been read.  Pings are strictly sequential with a short
pause in between; the pause is never part of a sample.  Any failure
aborts the whole probe -- statistics are only ever computed over the full
set of samples.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List

from .api import LibrespeedAPI
from .constants import EMPTY_PATH
from .logger import log
from .stats import calculate_jitter, calculate_mean, ns_to_ms


Clock = Callable[[], int]
Sleep = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class LatencyResult:
    """Ordered ping samples and the statistics derived from them."""

    pings: List[float] = field(default_factory=list)
    latency_ms: float = 0.0
    jitter_ms: float = 0.0

    def calculate(self) -> None:
        """Derive mean latency and population-stddev jitter."""
        self.latency_ms = calculate_mean(self.pings)
        self.jitter_ms = calculate_jitter(self.pings)

    def to_dict(self) -> dict:
        return {
            "pings": [round(p, 3) for p in self.pings],
            "latency_ms": round(self.latency_ms, 3),
            "jitter_ms": round(self.jitter_ms, 3),
        }


# ---------------------------------------------------------------------------
# Tester
# ---------------------------------------------------------------------------

class LatencyTester:
    """Time ``ping_count`` sequential round trips to the server."""

    def __init__(
        self,
        api: LibrespeedAPI,
        clock: Clock = time.perf_counter_ns,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.api = api
        self.ping_count = api.settings.ping_count
        self.ping_interval = api.settings.ping_interval
        self._clock = clock
        self._sleep = sleep

    async def test(self) -> LatencyResult:
        result = LatencyResult()

        for i in range(self.ping_count):
            if i > 0:
                await self._sleep(self.ping_interval)
            result.pings.append(await self._ping_once())

        result.calculate()
        log.debug(
            "ping %.3f ms, jitter %.3f ms over %d samples",
            result.latency_ms, result.jitter_ms, len(result.pings),
        )
        return result

    async def _ping_once(self) -> float:
        start = self._clock()
        async with self.api.request("GET", EMPTY_PATH) as resp:
            await resp.read()
        return ns_to_ms(self._clock() - start)
