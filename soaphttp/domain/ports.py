from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Union

from .errors import SoapFault
from .messages import HttpRequest, HttpResponse

TransportReply = Union[str, SoapFault, None]


# ---- Ports (Hexagonal boundaries) ----
class HttpClientPort(Protocol):
    """Sends one HTTP request; raises on any transport failure."""

    def send(self, request: HttpRequest, options: Mapping[str, Any]) -> HttpResponse: ...


class SoapTransportPort(Protocol):
    """Delivery hook the SOAP layer calls once per outbound envelope.

    Returns the response body, ``None`` for one-way calls, or a fault.
    """

    def do_request(
        self,
        request: Union[str, bytes],
        location: str,
        action: Optional[str],
        version: int,
        one_way: bool = False,
    ) -> TransportReply: ...
