from __future__ import annotations

import pytest

from ledgerx_client_sdk import load_config, resolve_tenant
from ledgerx_client_sdk.config import ConfigError
from ledgerx_client_sdk.tenant import PUBLIC_TENANT, tenant_headers
from ledgerx_core_app.config import CoreAppConfigError, load_core_app_config


def test_load_config_defaults() -> None:
    cfg = load_config()
    assert cfg.api_base_url == "https://api.example.com"
    assert cfg.tenant == PUBLIC_TENANT
    assert cfg.retries == 3
    assert cfg.verify_ssl is True


def test_env_specific_base_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_ENV", "prod")
    monkeypatch.setenv("LEDGERX_API_BASE_URL_PROD", "https://prod.example.com/")
    cfg = load_config()
    assert cfg.api_base_url == "https://prod.example.com"


def test_missing_base_url_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LEDGERX_API_BASE_URL")
    with pytest.raises(ConfigError):
        load_config()


def test_invalid_retries_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_RETRIES", "-1")
    with pytest.raises(ConfigError):
        load_config()


def test_tenant_from_hostname(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_HOSTNAME", "empresa.midominio.com")
    assert load_config().tenant == "empresa"


def test_explicit_tenant_overrides_hostname(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_HOSTNAME", "empresa.midominio.com")
    monkeypatch.setenv("LEDGERX_TENANT", "Otra")
    assert load_config().tenant == "otra"


@pytest.mark.parametrize(
    ("hostname", "expected"),
    [
        (None, PUBLIC_TENANT),
        ("localhost:5173", PUBLIC_TENANT),
        ("www.midominio.com", PUBLIC_TENANT),
        ("midominio", PUBLIC_TENANT),
        ("ferreteria.midominio.com", "ferreteria"),
    ],
)
def test_resolve_tenant(hostname: str | None, expected: str) -> None:
    assert resolve_tenant(hostname) == expected


def test_public_tenant_sends_no_header() -> None:
    assert tenant_headers(PUBLIC_TENANT) == {}
    assert tenant_headers("empresa") == {"X-Tenant": "empresa"}


def test_core_app_config_poll_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGERX_POLL_INTERVAL_SECONDS", "2.5")
    assert load_core_app_config().poll_interval_seconds == 2.5
    monkeypatch.setenv("LEDGERX_POLL_INTERVAL_SECONDS", "0")
    with pytest.raises(CoreAppConfigError):
        load_core_app_config()
