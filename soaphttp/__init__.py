"""SOAP client with a pluggable HTTP transport."""

from soaphttp.adapters.http_client import HttpConfig, RequestsHttpClient
from soaphttp.adapters.soap_http_client import SoapHttpClient
from soaphttp.domain import (
    AUTHENTICATION_BASIC,
    AUTHENTICATION_DIGEST,
    SOAP_1_1,
    SOAP_1_2,
    ConcurrentUseError,
    HttpRequest,
    HttpResponse,
    OptionsError,
    SoapClientOptions,
    SoapFault,
    SoapHttpError,
    TransportResult,
)
from soaphttp.domain.options import (
    WSDL_CACHE_BOTH,
    WSDL_CACHE_DISK,
    WSDL_CACHE_MEMORY,
    WSDL_CACHE_NONE,
)

__version__ = "0.1.0"

__all__ = [
    "AUTHENTICATION_BASIC",
    "AUTHENTICATION_DIGEST",
    "ConcurrentUseError",
    "HttpConfig",
    "HttpRequest",
    "HttpResponse",
    "OptionsError",
    "RequestsHttpClient",
    "SOAP_1_1",
    "SOAP_1_2",
    "SoapClientOptions",
    "SoapFault",
    "SoapHttpClient",
    "SoapHttpError",
    "TransportResult",
    "WSDL_CACHE_BOTH",
    "WSDL_CACHE_DISK",
    "WSDL_CACHE_MEMORY",
    "WSDL_CACHE_NONE",
]
