"""
Probe settings.

The command line exposes none of these; they exist so that tests (and
embedding code) can shrink the pause between pings or the payload sizes
without patching module constants::

    settings = ProbeSettings(ping_interval=0.0, timeout=1.0)
    async with LibrespeedClient(url, settings=settings) as client:
        result = await client.run_test()
"""
from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_CHUNK_COUNT,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_PING_COUNT,
    DEFAULT_PING_INTERVAL,
    DEFAULT_TIMEOUT,
    UPLOAD_BUFFER_SIZE,
)


@dataclass(frozen=True)
class ProbeSettings:
    """Fixed tunables shared by the probes of one client."""

    timeout: float = DEFAULT_TIMEOUT
    ping_count: int = DEFAULT_PING_COUNT
    ping_interval: float = DEFAULT_PING_INTERVAL
    chunk_count: int = DEFAULT_CHUNK_COUNT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    upload_size: int = UPLOAD_BUFFER_SIZE

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.ping_count < 1:
            raise ValueError("ping_count must be at least 1")
        if self.ping_interval < 0:
            raise ValueError("ping_interval must not be negative")
        if self.chunk_count < 1 or self.chunk_size < 1:
            raise ValueError("chunk_count and chunk_size must be positive")
        if self.upload_size < 1:
            raise ValueError("upload_size must be positive")

    @property
    def download_bytes(self) -> int:
        """Nominal size of one download, used for the throughput figure."""
        return self.chunk_count * self.chunk_size


DEFAULT_SETTINGS = ProbeSettings()
