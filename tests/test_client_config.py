# SODA Client
# File: tests/test_client_config.py
# Version: v2

"""SodaClient construction and environment-driven configuration."""

import logging

import pytest

from soda_client.client import SodaClient
from soda_client.config import SodaConfig
from soda_client.errors import SodaValidationError


@pytest.mark.parametrize(
    "url",
    [
        "opendata.socrata.com",
        "http://opendata.socrata.com",
        "https://opendata.socrata.com/",
    ],
)
def test_domain_is_normalised(url) -> None:
    assert SodaClient(url).domain == "opendata.socrata.com"


def test_defaults() -> None:
    client = SodaClient("opendata.socrata.com", None)

    assert client.token == ""
    assert client.email == ""
    assert client.password == ""
    assert client.oauth2_token == ""
    assert client.associative_arrays_enabled() is True


def test_associative_toggle() -> None:
    client = SodaClient("opendata.socrata.com")

    client.disable_associative_arrays()
    assert client.associative_arrays_enabled() is False

    client.enable_associative_arrays()
    assert client.associative_arrays_enabled() is True


def test_half_credentials_log_a_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="soda_client.client"):
        SodaClient("opendata.socrata.com", "tok", email="me@example.com")

    assert "Only one of email/password" in caplog.text


def test_full_credentials_do_not_warn(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="soda_client.client"):
        client = SodaClient("opendata.socrata.com", "tok", "me@example.com", "pw")

    assert caplog.text == ""
    assert client.auth.has_basic_credentials is True


def test_oauth_token_can_be_set_later() -> None:
    client = SodaClient("opendata.socrata.com")
    client.set_oauth2_token("abc")

    assert client.auth.headers()["Authorization"] == "OAuth abc"


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SOCRATA_DOMAIN", "https://data.seattle.gov/")
    monkeypatch.setenv("SOCRATA_APP_TOKEN", " token ")
    monkeypatch.setenv("SOCRATA_TIMEOUT_SECONDS", "9999")
    monkeypatch.setenv("SOCRATA_VERIFY_TLS", "off")
    monkeypatch.setenv("SOCRATA_ASSOCIATIVE", "0")

    config = SodaConfig.from_env()
    assert config.app_token == "token"
    assert config.timeout_seconds == 600
    assert config.verify_tls is False

    client = SodaClient.from_env()
    assert client.domain == "data.seattle.gov"
    assert client.timeout == 600.0
    assert client.associative_arrays_enabled() is False


def test_config_from_env_bad_timeout_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("SOCRATA_TIMEOUT_SECONDS", "soon")

    assert SodaConfig.from_env().timeout_seconds == 30


def test_from_config_requires_domain(monkeypatch) -> None:
    monkeypatch.delenv("SOCRATA_DOMAIN", raising=False)

    with pytest.raises(SodaValidationError):
        SodaClient.from_env()


def test_config_domain_is_stripped(monkeypatch) -> None:
    monkeypatch.setenv("SOCRATA_DOMAIN", "  data.seattle.gov \n")

    assert SodaConfig.from_env().domain == "data.seattle.gov"


def test_config_blank_domain_is_unset(monkeypatch) -> None:
    monkeypatch.setenv("SOCRATA_DOMAIN", "   ")

    assert SodaConfig.from_env().domain is None
