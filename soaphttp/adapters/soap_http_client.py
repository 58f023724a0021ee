"""SOAP client whose HTTP transport is delegated to a pluggable HTTP client.

Call chain for a WSDL operation:
    ``SoapHttpClient.call`` -> zeep serializes the envelope ->
    ``ZeepTransport.post`` -> ``SoapHttpClient.do_request`` ->
    ``HttpClientPort.send`` -> response body back to zeep for parsing.

``do_request`` is also usable on its own with a pre-serialized envelope,
which is the only mode available when no WSDL is given.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Union

from zeep import Client
from zeep.cache import InMemoryCache, SqliteCache
from zeep.exceptions import Fault
from zeep.wsdl.bindings.soap import Soap11Binding, Soap12Binding

from soaphttp.domain.diagnostics import format_headers
from soaphttp.domain.errors import ConcurrentUseError, SoapFault, SoapHttpError
from soaphttp.domain.messages import HttpRequest, HttpResponse, TransportResult
from soaphttp.domain.options import (
    SOAP_1_2,
    WSDL_CACHE_DISK,
    WSDL_CACHE_NONE,
    SoapClientOptions,
    build_client_options,
    client_specific,
)
from soaphttp.domain.ports import HttpClientPort, SoapTransportPort, TransportReply
from soaphttp.utils.logging import trace_enabled

from .http_client import RequestsHttpClient
from .zeep_transport import ZeepTransport


CONTENT_TYPE_SOAP_1_1 = "text/xml"
CONTENT_TYPE_SOAP_1_2 = "application/soap+xml"


class SoapHttpClient(SoapTransportPort):
    """SOAP client that sends every envelope through an injected HTTP client.

    Options are the legacy flat dictionary (or a ``SoapClientOptions``).
    SOAP-native keys configure this object; the rest are translated once,
    here, into HTTP client options and reused for every call.

    The most recent request/response pair and, with ``trace`` enabled, their
    raw header and body text stay available for diagnostics. One instance
    serves one call at a time; use separate instances for concurrent calls.
    """

    def __init__(
        self,
        wsdl: Optional[str] = None,
        options: Union[Mapping[str, Any], SoapClientOptions, None] = None,
        *,
        client: Optional[HttpClientPort] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.wsdl = wsdl
        if isinstance(options, SoapClientOptions):
            self.settings = options
        else:
            self.settings = SoapClientOptions.from_mapping(options)
        self.options: Dict[str, Any] = self.settings.to_dict()
        self._client = client
        self._client_options = build_client_options(self.get_client_specific())
        self._trace = bool(self.settings.trace) if self.settings.trace is not None else trace_enabled()

        self._request: Optional[HttpRequest] = None
        self._response: Optional[HttpResponse] = None
        self._last_request_headers: Optional[str] = None
        self._last_response_headers: Optional[str] = None
        self._last_request: Optional[str] = None
        self._last_response: Optional[str] = None
        self._busy = threading.Lock()

        self._zeep: Optional[Client] = None
        self._service: Any = None

    # ---------- HTTP client ----------

    @property
    def client(self) -> HttpClientPort:
        if self._client is None:
            self._client = RequestsHttpClient()
        return self._client

    @client.setter
    def client(self, client: HttpClientPort) -> None:
        self._client = client

    def get_client_specific(self) -> Dict[str, Any]:
        """Options that are not native to the SOAP layer, untranslated."""
        return client_specific(self.options)

    @property
    def client_options(self) -> Dict[str, Any]:
        """Translated HTTP client options, computed at construction."""
        return dict(self._client_options)

    # ---------- diagnostics ----------

    @property
    def request(self) -> Optional[HttpRequest]:
        return self._request

    @property
    def response(self) -> Optional[HttpResponse]:
        return self._response

    @property
    def last_request_headers(self) -> Optional[str]:
        return self._last_request_headers

    @property
    def last_response_headers(self) -> Optional[str]:
        return self._last_response_headers

    @property
    def last_request(self) -> Optional[str]:
        return self._last_request

    @property
    def last_response(self) -> Optional[str]:
        return self._last_response

    @property
    def trace(self) -> bool:
        """Whether header and body text is captured; unset follows SOAPHTTP_DEBUG."""
        return self._trace

    # ---------- transport hook ----------

    def exchange(
        self,
        request: Union[str, bytes],
        location: str,
        action: Optional[str],
        version: int,
    ) -> TransportResult:
        """Send one envelope and report what happened, without storing it.

        Transport failures are captured as ``TransportResult.fault``.
        """
        body = request.encode(self.settings.encoding or "utf-8") if isinstance(request, str) else bytes(request)
        http_request = HttpRequest("POST", location, self._headers(body, action, version), body)
        request_headers = format_headers(http_request) if self.trace else None

        self._log.debug("POST %s action=%s", location, action or "-")
        try:
            response = self.client.send(http_request, self._client_options)
        except Exception as exc:
            fault = SoapFault(_fault_code(exc), str(exc) or type(exc).__name__, context=f"POST {location}")
            self._log.warning("Transport failure for POST %s: [%s] %s", location, fault.faultcode, fault.faultstring)
            return TransportResult(http_request, request_headers=request_headers, fault=fault)

        return TransportResult(
            http_request,
            response,
            request_headers=request_headers,
            response_headers=format_headers(response) if self.trace else None,
        )

    def do_request(
        self,
        request: Union[str, bytes],
        location: str,
        action: Optional[str],
        version: int,
        one_way: bool = False,
    ) -> TransportReply:
        """Deliver a serialized envelope and return the raw response body.

        Args:
            request: Serialized SOAP envelope.
            location: Endpoint URL.
            action: SOAP action; omitted from the headers when empty.
            version: ``SOAP_1_1`` or ``SOAP_1_2``; selects the content type.
            one_way: Discard the response body and return ``None``.

        Returns:
            Response body text, ``None`` for one-way calls, or a ``SoapFault``
            when the transport failed and ``exceptions`` is not ``True``.

        Raises:
            SoapFault: Transport failure with ``exceptions=True``.
            ConcurrentUseError: Another call is already in flight.
        """
        if not self._busy.acquire(blocking=False):
            raise ConcurrentUseError(
                "SoapHttpClient is already sending a request", context=f"POST {location}"
            )
        try:
            result = self.exchange(request, location, action, version)
            self._store(result)
        finally:
            self._busy.release()

        if result.fault is not None:
            return self._fault(result.fault)
        if one_way:
            return None
        return result.body

    # ---------- WSDL operations ----------

    @property
    def zeep_client(self) -> Client:
        if self._zeep is None:
            if self.wsdl is None:
                raise SoapHttpError("WSDL operations need a WSDL; use do_request in non-WSDL mode")
            transport = ZeepTransport(self, cache=_wsdl_cache(self.settings.cache_wsdl))
            self._zeep = Client(self.wsdl, transport=transport)
        return self._zeep

    @property
    def service(self) -> Any:
        """zeep service proxy bound to the port matching ``soap_version``."""
        if self._service is None:
            self._service = self._bind_service(self.zeep_client)
        return self._service

    def call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a WSDL operation; faults follow the ``exceptions`` option."""
        try:
            return self.service[operation](*args, **kwargs)
        except SoapFault as fault:
            return self._fault(fault)
        except Fault as exc:
            fault = SoapFault(
                str(exc.code or "Server"),
                exc.message or "",
                detail=exc.detail,
                context=operation,
            )
            return self._fault(fault)

    # ---------- helpers ----------

    def _headers(self, body: bytes, action: Optional[str], version: int) -> Dict[str, str]:
        content_type = CONTENT_TYPE_SOAP_1_2 if version == SOAP_1_2 else CONTENT_TYPE_SOAP_1_1
        if self.settings.encoding:
            content_type += f";charset={self.settings.encoding}"
        headers = {"Content-Type": content_type, "Content-Length": str(len(body))}
        if action:
            headers["SOAPAction"] = action
        return headers

    def _store(self, result: TransportResult) -> None:
        self._request = result.request
        self._response = result.response
        if not self.trace:
            return
        self._last_request_headers = result.request_headers
        self._last_response_headers = result.response_headers
        self._last_request = result.request.body.decode(self.settings.encoding or "utf-8", errors="replace")
        self._last_response = result.body

    def _fault(self, fault: SoapFault) -> SoapFault:
        if self.settings.exceptions is True:
            raise fault
        return fault

    def _bind_service(self, client: Client) -> Any:
        version = self.settings.soap_version
        if version is None:
            return client.service
        wanted = Soap12Binding if version == SOAP_1_2 else Soap11Binding
        for service in client.wsdl.services.values():
            for port in service.ports.values():
                if isinstance(port.binding, wanted):
                    return client.bind(service.name, port.name)
        label = "1.2" if version == SOAP_1_2 else "1.1"
        raise SoapHttpError(f"WSDL has no SOAP {label} port", context=str(self.wsdl))


def _fault_code(exc: BaseException) -> str:
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if status is not None:
        return str(status)
    errno = getattr(exc, "errno", None)
    if errno is not None:
        return str(errno)
    return "0"


def _wsdl_cache(mode: Optional[int]) -> Any:
    if not mode or mode == WSDL_CACHE_NONE:
        return None
    if mode == WSDL_CACHE_DISK:
        return SqliteCache()
    return InMemoryCache()


__all__ = ["CONTENT_TYPE_SOAP_1_1", "CONTENT_TYPE_SOAP_1_2", "SoapHttpClient"]
