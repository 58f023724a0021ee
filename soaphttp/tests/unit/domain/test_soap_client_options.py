from __future__ import annotations

import pytest

from soaphttp.domain.errors import OptionsError
from soaphttp.domain.options import SOAP_1_2, WSDL_CACHE_MEMORY, SoapClientOptions


def test_from_mapping_splits_named_fields_and_extra() -> None:
    opts = SoapClientOptions.from_mapping(
        {"trace": True, "soap_version": SOAP_1_2, "login": "u", "verify": False}
    )

    assert opts.trace is True
    assert opts.soap_version == SOAP_1_2
    assert opts.login == "u"
    assert opts.extra == {"verify": False}


def test_to_dict_returns_only_set_options() -> None:
    legacy = {"cache_wsdl": WSDL_CACHE_MEMORY, "exceptions": False, "timeout": 12}

    assert SoapClientOptions.from_mapping(legacy).to_dict() == legacy


def test_from_mapping_accepts_none() -> None:
    assert SoapClientOptions.from_mapping(None).to_dict() == {}


@pytest.mark.parametrize(
    "legacy",
    [{"soap_version": 3}, {"authentication": 7}, {"cache_wsdl": 9}],
)
def test_invalid_modes_are_rejected(legacy) -> None:
    with pytest.raises(OptionsError):
        SoapClientOptions.from_mapping(legacy)


def test_extra_cannot_shadow_named_field() -> None:
    with pytest.raises(OptionsError) as exc_info:
        SoapClientOptions(extra={"trace": True})

    assert "trace" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


def test_explicit_none_is_kept() -> None:
    legacy = {"proxy_host": None, "user_agent": None, "trace": True}

    assert SoapClientOptions.from_mapping(legacy).to_dict() == legacy


def test_unknown_encoding_is_rejected() -> None:
    with pytest.raises(OptionsError) as exc_info:
        SoapClientOptions.from_mapping({"encoding": "no-such-codec"})

    assert "no-such-codec" in str(exc_info.value)


def test_known_encoding_is_accepted() -> None:
    assert SoapClientOptions.from_mapping({"encoding": "ISO-8859-1"}).encoding == "ISO-8859-1"
