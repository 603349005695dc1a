"""
Download speed test module.

Issues a single ``GET /garbage?ckSize=N`` and drains the streamed body.

The reported speed assumes the server sent exactly ``chunk_count *
chunk_size`` bytes; the byte count actually received is recorded in
``DownloadResult.bytes_received`` but deliberately not used.  This keeps
the figure comparable with the LibreSpeed reference client, at the cost
of being wrong whenever a server ignores or caps ``ckSize``.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .api import LibrespeedAPI
from .constants import GARBAGE_PATH, READ_CHUNK_SIZE
from .logger import log
from .stats import megabits_per_second


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class DownloadResult:
    """Download test result."""

    bytes_total: int = 0        # nominal: chunk_count * chunk_size
    bytes_received: int = 0
    duration_ms: float = 0.0
    speed_mbps: float = 0.0

    def calculate(self) -> None:
        """Derive speed from the nominal byte total and wall-clock duration."""
        self.speed_mbps = megabits_per_second(self.bytes_total, self.duration_ms / 1000)

    def to_dict(self) -> dict:
        return {
            "speed_mbps": round(self.speed_mbps, 2),
            "bytes_total": self.bytes_total,
            "bytes_received": self.bytes_received,
            "duration_ms": round(self.duration_ms, 2),
        }


# ---------------------------------------------------------------------------
# Tester
# ---------------------------------------------------------------------------

class DownloadTester:
    """Single-stream download speed tester."""

    def __init__(
        self,
        api: LibrespeedAPI,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.api = api
        self.chunk_count = api.settings.chunk_count
        self.bytes_total = api.settings.download_bytes
        self._clock = clock

    async def test(self) -> DownloadResult:
        result = DownloadResult(bytes_total=self.bytes_total)
        path = f"{GARBAGE_PATH}?ckSize={self.chunk_count}"

        start = self._clock()
        async with self.api.request("GET", path) as resp:
            async for chunk in resp.content.iter_chunked(READ_CHUNK_SIZE):
                result.bytes_received += len(chunk)
        elapsed_ns = self._clock() - start

        result.duration_ms = elapsed_ns / 1_000_000
        result.calculate()
        log.debug(
            "download %.2f Mbps (%d bytes nominal, %d received, %.1f ms)",
            result.speed_mbps, result.bytes_total, result.bytes_received,
            result.duration_ms,
        )
        return result
