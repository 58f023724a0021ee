from __future__ import annotations

from soaphttp.domain.options import (
    AUTHENTICATION_BASIC,
    AUTHENTICATION_DIGEST,
    KEEP_ALIVE_HEADER,
    NATIVE_OPTIONS,
    SOAP_1_2,
    build_client_options,
    client_specific,
)


def _translate(options):
    return build_client_options(client_specific(options))


def test_client_specific_drops_every_native_option() -> None:
    options = {name: f"value-{name}" for name in NATIVE_OPTIONS}
    options.update({"verify": False, "custom": 1})

    specific = client_specific(options)

    assert specific == {"verify": False, "custom": 1}
    assert len(NATIVE_OPTIONS) == 13


def test_unconsumed_options_pass_through_unchanged() -> None:
    options = {"soap_version": SOAP_1_2, "trace": True, "verify": "/etc/ca.pem", "allow_redirects": False}

    assert _translate(options) == {"verify": "/etc/ca.pem", "allow_redirects": False}


def test_digest_authentication_adds_marker_and_removes_sources() -> None:
    result = _translate({"authentication": AUTHENTICATION_DIGEST, "login": "u", "password": "p"})

    assert result == {"auth": ["u", "p", "digest"]}


def test_basic_authentication_without_password_uses_empty_string() -> None:
    result = _translate({"authentication": AUTHENTICATION_BASIC, "login": "u"})

    assert result == {"auth": ["u", ""]}


def test_login_without_authentication_mode_is_passed_through() -> None:
    result = _translate({"login": "u", "password": "p"})

    assert result == {"login": "u", "password": "p"}


def test_certificate_needs_both_path_and_passphrase() -> None:
    both = _translate({"local_cert": "/certs/client.pem", "passphrase": "secret"})
    path_only = _translate({"local_cert": "/certs/client.pem"})

    assert both == {"cert": ["/certs/client.pem", "secret"]}
    assert path_only == {"local_cert": "/certs/client.pem"}


def test_proxy_with_credentials_and_port() -> None:
    result = _translate(
        {
            "proxy_host": "http://proxy.example",
            "proxy_login": "a",
            "proxy_password": "b",
            "proxy_port": 8080,
        }
    )

    assert result == {"proxy": "http://a:b@proxy.example:8080"}


def test_proxy_host_alone_is_used_verbatim() -> None:
    assert _translate({"proxy_host": "proxy.example"}) == {"proxy": "proxy.example"}


def test_proxy_credentials_on_bare_host_keep_host() -> None:
    result = _translate({"proxy_host": "proxy.example", "proxy_login": "a", "proxy_password": ""})

    assert result == {"proxy": "a:@proxy.example"}


def test_proxy_login_without_password_is_not_embedded() -> None:
    result = _translate({"proxy_host": "http://proxy.example", "proxy_login": "a", "proxy_port": 0})

    assert result == {"proxy": "http://proxy.example", "proxy_login": "a"}


def test_empty_proxy_host_leaves_proxy_keys_untouched() -> None:
    result = _translate({"proxy_host": "", "proxy_port": 3128})

    assert result == {"proxy_host": "", "proxy_port": 3128}


def test_user_agent_and_keep_alive_share_headers() -> None:
    result = _translate({"user_agent": "soap-test/1.0", "keep_alive": True})

    assert result == {"headers": {"User-Agent": "soap-test/1.0", "Connection": KEEP_ALIVE_HEADER}}


def test_disabled_keep_alive_is_passed_through() -> None:
    assert _translate({"keep_alive": False}) == {"keep_alive": False}


def test_connection_timeout_becomes_connect_timeout() -> None:
    assert _translate({"connection_timeout": 5}) == {"connect_timeout": 5}


def test_translated_keys_win_over_pass_through_keys() -> None:
    result = _translate({"user_agent": "ua", "headers": {"X-Other": "1"}})

    assert result == {"headers": {"User-Agent": "ua"}}


def test_translation_is_repeatable_and_does_not_mutate_input() -> None:
    options = {
        "authentication": AUTHENTICATION_DIGEST,
        "login": "u",
        "password": "p",
        "user_agent": "ua",
        "connection_timeout": 3,
        "trace": True,
    }
    snapshot = dict(options)

    first = _translate(options)
    second = _translate(options)

    assert first == second
    assert repr(first) == repr(second)
    assert first["auth"] is not second["auth"]
    assert options == snapshot


def test_proxy_credentials_keep_ipv6_brackets() -> None:
    result = _translate(
        {"proxy_host": "http://[::1]", "proxy_login": "a", "proxy_password": "b", "proxy_port": 3128}
    )

    assert result == {"proxy": "http://a:b@[::1]:3128"}


def test_proxy_credentials_replace_existing_userinfo_and_port() -> None:
    result = _translate(
        {"proxy_host": "http://old:pw@[2001:db8::2]:8080", "proxy_login": "a", "proxy_password": "b"}
    )

    assert result == {"proxy": "http://a:b@[2001:db8::2]"}
