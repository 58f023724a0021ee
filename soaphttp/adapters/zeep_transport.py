"""zeep transport that hands serialized envelopes to ``SoapHttpClient``.

zeep keeps WSDL parsing and envelope (de)serialization; this class only
replaces the final HTTP POST. WSDL documents are still fetched by zeep's own
``load`` using the HTTP client's session when it has a ``requests`` one.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Mapping, Optional

import requests
from zeep.transports import Transport

from soaphttp.domain.errors import SoapFault
from soaphttp.domain.options import SOAP_1_1, SOAP_1_2

if TYPE_CHECKING:
    from .soap_http_client import SoapHttpClient


_ACTION_PARAM = re.compile(r'action\s*=\s*"?([^";]+)"?', re.IGNORECASE)


class ZeepTransport(Transport):
    """Routes zeep's outbound POSTs through ``SoapHttpClient.do_request``."""

    def __init__(self, adapter: "SoapHttpClient", cache: Any = None) -> None:
        session = getattr(adapter.client, "session", None)
        if not isinstance(session, requests.Session):
            session = None
        super().__init__(cache=cache, session=session)
        self.adapter = adapter

    def post(self, address: str, message: Any, headers: Mapping[str, str]):
        content_type = headers.get("Content-Type", "")
        version = SOAP_1_2 if "application/soap+xml" in content_type else SOAP_1_1
        if version == SOAP_1_2:
            action = _content_type_action(content_type)
        else:
            action = _unquote(headers.get("SOAPAction"))
        location = self.adapter.options.get("location") or address

        result = self.adapter.do_request(message, location, action, version)
        if isinstance(result, SoapFault):
            raise result
        return self.adapter.response


def _content_type_action(content_type: str) -> Optional[str]:
    # SOAP 1.2 carries the action as a media type parameter; zeep renders a
    # missing one as action="None".
    match = _ACTION_PARAM.search(content_type)
    if not match or match.group(1) == "None":
        return None
    return match.group(1)


def _unquote(value: Optional[str]) -> Optional[str]:
    # zeep quotes SOAPAction and sends '""' for operations without one.
    if value and len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return value or None


__all__ = ["ZeepTransport"]
