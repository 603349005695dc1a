"""
Network measurement statistics.

Pure functions -- no I/O, no side effects.  Everything here is
deterministic and easy to unit-test.
"""
from __future__ import annotations

import math
import statistics
from typing import Sequence


# ---------------------------------------------------------------------------
# Latency
# ---------------------------------------------------------------------------

def calculate_mean(samples: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for no samples."""
    if not samples:
        return 0.0
    return statistics.fmean(samples)


def calculate_jitter(samples: Sequence[float]) -> float:
    """
    Population standard deviation of *samples*.

    Divides by ``N``, not ``N - 1``: the samples are the whole run, not an
    estimate of some wider population.
    """
    if len(samples) < 2:
        return 0.0
    mean = statistics.fmean(samples)
    return math.sqrt(sum((s - mean) ** 2 for s in samples) / len(samples))


def ns_to_ms(elapsed_ns: int) -> float:
    """Nanoseconds to milliseconds, truncated to whole microseconds."""
    return float(elapsed_ns // 1000) / 1000.0


# ---------------------------------------------------------------------------
# Throughput
# ---------------------------------------------------------------------------

def megabits_per_second(num_bytes: int, seconds: float) -> float:
    """``(bytes * 8) / (1e6 * seconds)``; 0.0 when no time elapsed."""
    if seconds <= 0:
        return 0.0
    return (num_bytes * 8) / (1_000_000 * seconds)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_speed(speed_mbps: float) -> str:
    """Human-readable speed string."""
    if speed_mbps >= 1000:
        return f"{speed_mbps / 1000:.2f} Gbps"
    return f"{speed_mbps:.2f} Mbps"


def format_latency(latency_ms: float) -> str:
    """Human-readable latency string."""
    if latency_ms >= 1000:
        return f"{latency_ms / 1000:.2f} s"
    return f"{latency_ms:.2f} ms"
