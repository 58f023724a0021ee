from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple, Union

from requests.structures import CaseInsensitiveDict

from soaphttp.domain.messages import HttpRequest, HttpResponse
from soaphttp.domain.ports import HttpClientPort


Outcome = Union[HttpResponse, BaseException]


@dataclass
class FakeHttpClient(HttpClientPort):
    """Offline substitute for ``RequestsHttpClient`` with queued outcomes.

    Each ``send`` pops the next queued response (or raises the next queued
    exception). When the queue is empty, ``default`` is returned.
    """

    outcomes: List[Outcome] = field(default_factory=list)
    default: HttpResponse = field(default_factory=lambda: HttpResponse(200, "OK"))
    sent: List[Tuple[HttpRequest, Dict[str, Any]]] = field(default_factory=list)

    def reply(
        self,
        body: Union[str, bytes] = b"",
        *,
        status_code: int = 200,
        reason: str = "OK",
        headers: Mapping[str, str] | None = None,
    ) -> "FakeHttpClient":
        content = body.encode("utf-8") if isinstance(body, str) else body
        all_headers = CaseInsensitiveDict({"Content-Type": "text/xml; charset=utf-8"})
        all_headers.update(headers or {})
        self.outcomes.append(HttpResponse(status_code, reason, all_headers, content))
        return self

    def fail(self, exc: BaseException) -> "FakeHttpClient":
        self.outcomes.append(exc)
        return self

    # ---------- HttpClientPort ----------

    def send(self, request: HttpRequest, options: Mapping[str, Any]) -> HttpResponse:
        self.sent.append((request, dict(options)))
        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last_request(self) -> HttpRequest:
        if not self.sent:
            raise AssertionError("FakeHttpClient.send was never called")
        return self.sent[-1][0]


__all__ = ["FakeHttpClient"]
