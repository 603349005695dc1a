"""
Error taxonomy.

Probes raise ``NetworkError``, ``ProtocolError`` or ``DecodeError``; the
orchestrator wraps whichever one escapes in a ``StageError`` naming the
stage that failed.  Nothing in the library retries or swallows them.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Stage(Enum):
    """The four stages of a test run, in execution order."""

    IDENTITY = "identity"
    PING = "ping"
    DOWNLOAD = "download"
    UPLOAD = "upload"

    @property
    def description(self) -> str:
        if self is Stage.IDENTITY:
            return "failed to get IP info"
        return f"{self.value} test failed"


class SpeedtestError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(SpeedtestError):
    """Connection could not be made or broke mid-transfer."""


class ProbeTimeoutError(NetworkError):
    """A request exceeded the shared timeout."""


class ProtocolError(SpeedtestError):
    """The server answered with an unexpected HTTP status."""

    def __init__(self, status: int, message: Optional[str] = None) -> None:
        self.status = status
        super().__init__(message or f"unexpected HTTP status: {status}")


class DecodeError(SpeedtestError):
    """The response body was malformed or missing required fields."""


class StageError(SpeedtestError):
    """A probe failed; carries the failing stage and the underlying error."""

    def __init__(self, stage: Stage, cause: SpeedtestError) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage.description}: {cause}")
