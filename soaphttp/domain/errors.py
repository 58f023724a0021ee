"""Error types shared by the option translator and the transport adapter.

``SoapFault`` doubles as the fault value a SOAP call may return instead of a
result, so it must stay cheap to construct and safe to pass around.
"""

from __future__ import annotations

from typing import Any, Optional


class SoapHttpError(RuntimeError):
    """Base class for failures raised by this package."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message)
        self.context = context


class SoapFault(SoapHttpError):
    """Transport or server fault, raised or returned in place of a result."""

    def __init__(
        self,
        faultcode: str,
        faultstring: str,
        *,
        detail: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(faultstring, context=context)
        self.faultcode = faultcode
        self.faultstring = faultstring
        self.detail = detail

    def __repr__(self) -> str:
        return f"SoapFault(faultcode={self.faultcode!r}, faultstring={self.faultstring!r})"


class OptionsError(SoapHttpError, ValueError):
    """Invalid value for a recognised client option."""


class ConcurrentUseError(SoapHttpError):
    """A second call entered the transport hook of a busy adapter."""


__all__ = ["ConcurrentUseError", "OptionsError", "SoapFault", "SoapHttpError"]
