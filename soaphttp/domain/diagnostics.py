"""Raw-protocol rendering of envelopes for trace output.

The text is for humans and log files only; requests are never rebuilt from it.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from .messages import HttpRequest, HttpResponse

_CRLF = "\r\n"


def format_headers(message: Union[HttpRequest, HttpResponse, None]) -> str:
    """Return the start line and header lines of ``message``.

    Requests render as ``POST /path HTTP/1.1`` followed by a ``Host`` line
    when the headers carry none. Responses render as ``HTTP/1.1 200 OK``.
    Anything else yields an empty string.
    """
    if isinstance(message, HttpRequest):
        lines = [f"{message.method} {message.request_target}".strip() + f" HTTP/{message.protocol_version}"]
        if not message.has_header("host"):
            lines.append(f"Host: {message.host}")
    elif isinstance(message, HttpResponse):
        lines = [f"HTTP/{message.http_version} {message.status_code} {message.reason}"]
    else:
        return ""

    lines.extend(_header_lines(message.headers))
    return _CRLF.join(lines)


def _header_lines(headers: Mapping[str, Any]) -> List[str]:
    return [f"{name}: {_join(values)}" for name, values in headers.items()]


def _join(values: Union[str, Iterable[Any], Any]) -> str:
    if isinstance(values, (list, tuple)):
        return ", ".join(str(value) for value in values)
    return str(values)


__all__ = ["format_headers"]
