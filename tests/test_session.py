from __future__ import annotations

import pytest
import responses

from ledgerx_client_sdk import ApiError, ApiSession, AuthStore, ClientConfig, SessionData, UserResponse

from ledgerx_core_app.services.auth_service import AuthService

BASE = "https://api.example.com"


def _config(tenant: str = "empresa") -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE, tenant=tenant, retries=0)


def test_stored_session_is_restored_for_same_tenant(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(cookies={"sessionid": "abc"}, tenant="empresa", user=UserResponse(id=1, username="ana")))
    session = ApiSession(_config(), auth_store=store)
    assert session.is_authenticated
    assert session.http_session.cookies.get("sessionid") == "abc"


def test_stored_session_for_other_tenant_is_ignored(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(cookies={"sessionid": "abc"}, tenant="otra", user=UserResponse(id=1, username="ana")))
    session = ApiSession(_config(), auth_store=store)
    assert not session.is_authenticated
    assert session.http_session.cookies.get("sessionid") is None


def test_corrupt_store_is_cleared(tmp_path) -> None:
    (tmp_path / "session.json").write_text("{not json")
    store = AuthStore(base_dir=tmp_path)
    assert store.load() is None
    assert not (tmp_path / "session.json").exists()


@responses.activate
def test_login_persists_cookies_and_logout_clears(tmp_path) -> None:
    responses.add(
        responses.POST,
        f"{BASE}/api/auth/login/",
        json={"success": True, "user": {"id": 3, "username": "cajero"}},
        headers={"Set-Cookie": "sessionid=s-1; Path=/"},
        status=200,
    )
    responses.add(responses.POST, f"{BASE}/api/auth/logout/", json={"success": True}, status=200)
    store = AuthStore(base_dir=tmp_path)
    session = ApiSession(_config(), auth_store=store)
    service = AuthService(session)

    user = service.login("cajero", "secreto")
    assert user.username == "cajero"
    saved = store.load()
    assert saved is not None
    assert saved.cookies.get("sessionid") == "s-1"
    assert saved.tenant == "empresa"

    service.logout()
    assert not session.is_authenticated
    assert store.load() is None


@responses.activate
def test_rejected_login_raises(tmp_path) -> None:
    responses.add(
        responses.POST,
        f"{BASE}/api/auth/login/",
        json={"success": False, "error": "Credenciales inválidas"},
        status=200,
    )
    service = AuthService(ApiSession(_config(), auth_store=AuthStore(base_dir=tmp_path)))
    with pytest.raises(ApiError) as exc_info:
        service.login("cajero", "malo")
    assert exc_info.value.status == 401
    assert exc_info.value.message == "Credenciales inválidas"
