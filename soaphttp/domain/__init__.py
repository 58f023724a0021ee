"""Domain package exports for options, envelopes, and faults."""

from .diagnostics import format_headers
from .errors import ConcurrentUseError, OptionsError, SoapFault, SoapHttpError
from .messages import HttpRequest, HttpResponse, TransportResult
from .options import (
    AUTHENTICATION_BASIC,
    AUTHENTICATION_DIGEST,
    NATIVE_OPTIONS,
    SOAP_1_1,
    SOAP_1_2,
    SoapClientOptions,
    build_client_options,
    client_specific,
)

__all__ = [
    "AUTHENTICATION_BASIC",
    "AUTHENTICATION_DIGEST",
    "ConcurrentUseError",
    "HttpRequest",
    "HttpResponse",
    "NATIVE_OPTIONS",
    "OptionsError",
    "SOAP_1_1",
    "SOAP_1_2",
    "SoapClientOptions",
    "SoapFault",
    "SoapHttpError",
    "TransportResult",
    "build_client_options",
    "client_specific",
    "format_headers",
]
