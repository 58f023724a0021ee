from __future__ import annotations

import logging

import pytest

from soaphttp.adapters.soap_http_client import SoapHttpClient
from soaphttp.adapters.http_client_mock import FakeHttpClient
from soaphttp.utils import logging as soap_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("SOAPHTTP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SOAPHTTP_DEBUG", raising=False)


def test_trace_is_off_without_environment() -> None:
    assert soap_logging.trace_enabled() is False


def test_debug_flag_enables_trace(monkeypatch) -> None:
    monkeypatch.setenv("SOAPHTTP_DEBUG", "yes")

    assert soap_logging.trace_enabled() is True


@pytest.mark.parametrize(
    ("level", "expected"),
    [("debug", True), ("DEBUG", True), (str(logging.DEBUG), True), ("5", True), ("15", False), ("info", False), ("bogus", False)],
)
def test_level_env_controls_trace(monkeypatch, level, expected) -> None:
    monkeypatch.setenv("SOAPHTTP_LOG_LEVEL", level)

    assert soap_logging.trace_enabled() is expected


def test_explicit_level_wins_over_debug_flag(monkeypatch) -> None:
    monkeypatch.setenv("SOAPHTTP_DEBUG", "1")
    monkeypatch.setenv("SOAPHTTP_LOG_LEVEL", "warning")

    assert soap_logging.trace_enabled() is False


def test_unset_trace_option_follows_environment(monkeypatch) -> None:
    monkeypatch.setenv("SOAPHTTP_DEBUG", "on")

    assert SoapHttpClient(None, {}, client=FakeHttpClient()).trace is True
    assert SoapHttpClient(None, {"trace": False}, client=FakeHttpClient()).trace is False
