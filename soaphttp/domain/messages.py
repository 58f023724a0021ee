"""Typed request/response envelopes exchanged with the HTTP client."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from requests.structures import CaseInsensitiveDict

from .errors import SoapFault


_RAW_VERSIONS = {9: "0.9", 10: "1.0", 11: "1.1", 20: "2"}
_CHARSET_PARAM = re.compile(r'charset\s*=\s*"?([^";\s]+)', re.IGNORECASE)


@dataclass(frozen=True)
class HttpRequest:
    """One outbound HTTP request carrying a serialized SOAP envelope."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    protocol_version: str = "1.1"

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def request_target(self) -> str:
        """Origin-form target (``/path?query``) of the request line."""
        parts = urlsplit(self.url)
        target = parts.path or "/"
        if parts.query:
            target = f"{target}?{parts.query}"
        return target

    @property
    def host(self) -> str:
        parts = urlsplit(self.url)
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
        return host

    def has_header(self, name: str) -> bool:
        wanted = name.lower()
        return any(key.lower() == wanted for key in self.headers)


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and body of one HTTP response.

    ``status_code``, ``headers`` and ``content`` follow the ``requests``
    naming so zeep can parse the reply directly.
    """

    status_code: int
    reason: str = ""
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    content: bytes = b""
    http_version: str = "1.1"
    encoding: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers))

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")

    @classmethod
    def from_requests(cls, resp: Any) -> "HttpResponse":
        """Copy a ``requests.Response`` into an immutable envelope."""
        raw_version = getattr(getattr(resp, "raw", None), "version", None)
        return cls(
            status_code=int(resp.status_code),
            reason=resp.reason or "",
            headers=CaseInsensitiveDict(resp.headers),
            content=resp.content or b"",
            http_version=_RAW_VERSIONS.get(raw_version, "1.1"),
            encoding=_declared_charset(resp.headers.get("Content-Type", "")),
        )


def _declared_charset(content_type: str) -> Optional[str]:
    # requests falls back to ISO-8859-1 for text/*; XML defaults to UTF-8 instead.
    match = _CHARSET_PARAM.search(content_type or "")
    return match.group(1) if match else None


@dataclass(frozen=True)
class TransportResult:
    """Everything one pass through the transport hook produced."""

    request: HttpRequest
    response: Optional[HttpResponse] = None
    request_headers: Optional[str] = None
    response_headers: Optional[str] = None
    fault: Optional[SoapFault] = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    @property
    def body(self) -> Optional[str]:
        if self.response is None:
            return None
        return self.response.text


__all__ = ["HttpRequest", "HttpResponse", "TransportResult"]
