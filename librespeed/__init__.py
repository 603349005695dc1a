"""LibreSpeed client library -- networking, measurement, and statistics."""

from .api import IdentityInfo, LibrespeedAPI
from .client import LibrespeedClient, Result
from .config import ProbeSettings
from .download import DownloadResult, DownloadTester
from .errors import (
    DecodeError,
    NetworkError,
    ProbeTimeoutError,
    ProtocolError,
    SpeedtestError,
    Stage,
    StageError,
)
from .latency import LatencyResult, LatencyTester
from .stats import (
    calculate_jitter,
    calculate_mean,
    format_latency,
    format_speed,
    megabits_per_second,
)
from .upload import UploadResult, UploadTester, make_payload

__all__ = [
    "DecodeError",
    "DownloadResult",
    "DownloadTester",
    "IdentityInfo",
    "LatencyResult",
    "LatencyTester",
    "LibrespeedAPI",
    "LibrespeedClient",
    "NetworkError",
    "ProbeSettings",
    "ProbeTimeoutError",
    "ProtocolError",
    "Result",
    "SpeedtestError",
    "Stage",
    "StageError",
    "UploadResult",
    "UploadTester",
    "calculate_jitter",
    "calculate_mean",
    "format_latency",
    "format_speed",
    "make_payload",
    "megabits_per_second",
]
