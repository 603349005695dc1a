"""
LibreSpeed server API client.

Owns the HTTP transport and performs the identity lookup.  All HTTP work
goes through a single ``aiohttp.ClientSession`` managed via the
async-context-manager protocol (``async with LibrespeedAPI(url) as api: ...``)
so the connection is pooled across every probe of a run.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp

from .config import DEFAULT_SETTINGS, ProbeSettings
from .constants import DEFAULT_BASE_URL, IDENTITY_PATH
from .errors import DecodeError, NetworkError, ProbeTimeoutError, ProtocolError
from .logger import log


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IdentityInfo:
    """Client IP and ISP as reported by ``/getIP?isp=true``."""

    ip: str
    isp: str
    country: str = ""
    location: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> IdentityInfo:
        """Decode the server payload, raising ``DecodeError`` if malformed."""
        if not isinstance(data, dict):
            raise DecodeError("identity response is not a JSON object")

        ip = data.get("processedString")
        isp_info = data.get("rawIspInfo")
        if not isinstance(ip, str):
            raise DecodeError("identity response lacks a 'processedString' string")
        if not isinstance(isp_info, dict) or not isinstance(isp_info.get("organization"), str):
            raise DecodeError("identity response lacks 'rawIspInfo.organization'")

        return cls(
            ip=ip,
            isp=isp_info["organization"],
            country=str(isp_info.get("country") or ""),
            location=str(isp_info.get("location") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "isp": self.isp,
            "country": self.country,
            "location": self.location,
        }


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

class LibrespeedAPI:
    """Async context-manager wrapping one LibreSpeed server."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        settings: ProbeSettings = DEFAULT_SETTINGS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.settings = settings
        self._timeout = aiohttp.ClientTimeout(total=settings.timeout)
        self._session = session
        self._owns_session = session is None

    # -- Context manager ----------------------------------------------------

    async def __aenter__(self) -> LibrespeedAPI:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    # -- Internal helpers ---------------------------------------------------

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError(
                "LibrespeedAPI must be used as an async context manager "
                "(async with LibrespeedAPI(url) as api: ...)"
            )
        return self._session

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @asynccontextmanager
    async def request(
        self, method: str, path: str, **kwargs: Any
    ) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Issue one request and yield the response once its status is 200.

        Transport failures (including those hit while the caller reads the
        body inside the ``async with`` block) surface as ``NetworkError``;
        any other status raises ``ProtocolError`` before the body is read.
        """
        session = self._ensure_session()
        url = self.url(path)
        log.debug("%s %s", method, url)

        try:
            async with session.request(method, url, timeout=self._timeout, **kwargs) as resp:
                if resp.status != 200:
                    raise ProtocolError(
                        resp.status, f"{method} {path} returned HTTP {resp.status}"
                    )
                yield resp
        except asyncio.TimeoutError as exc:
            raise ProbeTimeoutError(
                f"{method} {path} timed out after {self.settings.timeout:g}s"
            ) from exc
        except aiohttp.ClientError as exc:
            raise NetworkError(f"{method} {path}: {exc}") from exc

    # -- Public methods -----------------------------------------------------

    async def get_identity(self) -> IdentityInfo:
        """Fetch the client's public IP and ISP organisation."""
        async with self.request("GET", IDENTITY_PATH) as resp:
            try:
                data = await resp.json(content_type=None)
            except ValueError as exc:
                raise DecodeError(f"identity response is not valid JSON: {exc}") from exc

        info = IdentityInfo.from_dict(data)
        log.debug("identity: ip=%s isp=%s", info.ip, info.isp)
        return info
