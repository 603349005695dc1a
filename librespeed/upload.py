"""
Upload speed test module.

POSTs one pre-built payload to ``/empty`` and times the round trip.
Unlike the download probe the figure is byte-accurate: it uses the length
of the buffer actually sent.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .api import LibrespeedAPI
from .constants import EMPTY_PATH
from .logger import log
from .stats import megabits_per_second


UPLOAD_HEADERS = {"Content-Type": "application/octet-stream"}


def make_payload(size: int) -> bytes:
    """Deterministic ``i % 256`` byte pattern of *size* bytes."""
    pattern = bytes(range(256))
    full, rest = divmod(size, 256)
    return pattern * full + pattern[:rest]


@dataclass
class UploadResult:
    """Upload test result."""

    bytes_total: int = 0
    duration_ms: float = 0.0
    speed_mbps: float = 0.0

    def calculate(self) -> None:
        self.speed_mbps = megabits_per_second(self.bytes_total, self.duration_ms / 1000)

    def to_dict(self) -> dict:
        return {
            "speed_mbps": round(self.speed_mbps, 2),
            "bytes_total": self.bytes_total,
            "duration_ms": round(self.duration_ms, 2),
        }


class UploadTester:
    """Single-request upload speed tester."""

    def __init__(
        self,
        api: LibrespeedAPI,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.api = api
        self._payload = make_payload(api.settings.upload_size)
        self._clock = clock

    @property
    def payload(self) -> bytes:
        return self._payload

    async def test(self) -> UploadResult:
        result = UploadResult(bytes_total=len(self._payload))

        start = self._clock()
        async with self.api.request(
            "POST", EMPTY_PATH, data=self._payload, headers=UPLOAD_HEADERS
        ) as resp:
            await resp.read()
        elapsed_ns = self._clock() - start

        result.duration_ms = elapsed_ns / 1_000_000
        result.calculate()
        log.debug(
            "upload %.2f Mbps (%d bytes, %.1f ms)",
            result.speed_mbps, result.bytes_total, result.duration_ms,
        )
        return result
