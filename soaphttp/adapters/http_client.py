"""``requests``-backed HTTP client used as the default SOAP transport.

This module provides a thin wrapper around ``requests.Session`` that accepts
the translated client options produced by ``soaphttp.domain.options`` and
turns them into ``requests`` primitives (auth objects, proxies, timeouts and
a client-certificate SSL context).

Dependencies:
    - ``requests`` for network I/O.
    - ``soaphttp.domain.messages`` for the request/response envelopes.

Call context:
    - Created lazily by ``SoapHttpClient`` when no client was injected.
    - Any object with the same ``send`` signature can replace it.
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import requests
from requests import exceptions as req_exc
from requests.adapters import HTTPAdapter
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

from soaphttp.domain.messages import HttpRequest, HttpResponse
from soaphttp.domain.ports import HttpClientPort


_KNOWN_OPTIONS = frozenset(
    {
        "auth",
        "cert",
        "proxy",
        "headers",
        "connect_timeout",
        "timeout",
        "verify",
        "allow_redirects",
        "http_errors",
    }
)


@dataclass
class HttpConfig:
    """Timeout and retry defaults for SOAP calls.

    Attributes:
        request_timeout_s: Read timeout in seconds unless ``timeout`` is given.
        connect_timeout_s: Connect timeout unless ``connect_timeout`` is given.
        retries: Attempts after the first one on timeout/connectivity errors.
            SOAP calls are not idempotent in general, so the default is none.
    """
    request_timeout_s: float = 30
    connect_timeout_s: Optional[float] = None
    retries: int = 0


class CertPassphraseAdapter(HTTPAdapter):
    """Transport adapter presenting a client certificate protected by a passphrase."""

    def __init__(self, certfile: str, passphrase: str, **kwargs: Any) -> None:
        # HTTPAdapter.__init__ builds the pool manager, so the context must exist first.
        self.ssl_context = ssl.create_default_context()
        self.ssl_context.load_cert_chain(certfile, password=passphrase)
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = self.ssl_context
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args: Any, **kwargs: Any):
        kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(*args, **kwargs)


class RequestsHttpClient(HttpClientPort):
    """Sends ``HttpRequest`` envelopes through one ``requests.Session``.

    Failures are not mapped here: ``requests`` exceptions propagate so the
    caller can turn them into SOAP faults.
    """

    def __init__(
        self,
        cfg: Optional[HttpConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.cfg = cfg or HttpConfig()
        self._mounted_cert: Optional[Tuple[str, str]] = None

    def send(self, request: HttpRequest, options: Mapping[str, Any]) -> HttpResponse:
        """Send one request and return its response envelope.

        Args:
            request: Envelope built by the SOAP adapter.
            options: Translated client options (``auth``, ``cert``, ``proxy``,
                ``headers``, ``connect_timeout``, ``timeout``, ``verify``,
                ``allow_redirects``, ``http_errors``).

        Returns:
            ``HttpResponse`` copied from the ``requests`` response.

        Raises:
            requests.RequestException: Connectivity, timeout, or, unless
                ``http_errors`` is false, a 4xx/5xx status.
        """
        ignored = sorted(set(options) - _KNOWN_OPTIONS)
        if ignored:
            self._log.debug("Ignoring unsupported client options: %s", ", ".join(ignored))

        headers: Dict[str, str] = dict(options.get("headers") or {})
        headers.update(request.headers)
        prepared = self.session.prepare_request(
            requests.Request(
                request.method,
                request.url,
                headers=headers,
                data=request.body,
                auth=_auth(options.get("auth")),
            )
        )
        send_kwargs = self._send_kwargs(prepared.url, options)

        last_err: Optional[Exception] = None
        for _ in range(self.cfg.retries + 1):
            try:
                resp = self.session.send(prepared, **send_kwargs)
                break
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                last_err = exc
        else:
            raise last_err

        if options.get("http_errors", True):
            resp.raise_for_status()
        return HttpResponse.from_requests(resp)

    def _send_kwargs(self, url: str, options: Mapping[str, Any]) -> Dict[str, Any]:
        proxy = options.get("proxy")
        proxies = {"http": proxy, "https": proxy} if proxy else {}

        cert = options.get("cert")
        if isinstance(cert, (list, tuple)) and len(cert) == 2:
            self._mount_cert(str(cert[0]), str(cert[1]))
            cert = None

        kwargs = self.session.merge_environment_settings(
            url, proxies, False, options.get("verify"), cert
        )
        kwargs["timeout"] = self._timeout(options)
        kwargs["allow_redirects"] = bool(options.get("allow_redirects", True))
        return kwargs

    def _timeout(self, options: Mapping[str, Any]) -> Any:
        read = options.get("timeout", self.cfg.request_timeout_s)
        connect = options.get("connect_timeout", self.cfg.connect_timeout_s)
        if connect is None:
            return read
        return (connect, read)

    def _mount_cert(self, certfile: str, passphrase: str) -> None:
        if self._mounted_cert == (certfile, passphrase):
            return
        self.session.mount("https://", CertPassphraseAdapter(certfile, passphrase))
        self._mounted_cert = (certfile, passphrase)


def _auth(value: Any) -> Optional[AuthBase]:
    if not value:
        return None
    login = "" if value[0] is None else str(value[0])
    password = str(value[1]) if len(value) > 1 else ""
    if len(value) > 2 and value[2] == "digest":
        return HTTPDigestAuth(login, password)
    return HTTPBasicAuth(login, password)


__all__ = ["CertPassphraseAdapter", "HttpConfig", "RequestsHttpClient"]
