from __future__ import annotations

import pytest
import requests
import responses

from ledgerx_client_sdk import ClientConfig, HttpClient
from ledgerx_client_sdk.error_mapper import extract_message, map_error
from ledgerx_client_sdk.exceptions import (
    AuthError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)

BASE = "https://api.example.com"


def _http(tenant: str = "empresa", retries: int = 0) -> HttpClient:
    cfg = ClientConfig(env_name="test", api_base_url=BASE, tenant=tenant, retries=retries, retry_backoff_seconds=0)
    return HttpClient(cfg)


@responses.activate
def test_tenant_header_is_sent_for_named_tenant() -> None:
    responses.add(responses.GET, f"{BASE}/api/auth/me/", json={"id": 1, "username": "ana"}, status=200)
    _http().request("GET", "/api/auth/me/")
    assert responses.calls[0].request.headers["X-Tenant"] == "empresa"


@responses.activate
def test_public_tenant_omits_header() -> None:
    responses.add(responses.GET, f"{BASE}/api/auth/me/", json={"id": 1, "username": "ana"}, status=200)
    _http(tenant="public").request("GET", "/api/auth/me/")
    assert "X-Tenant" not in responses.calls[0].request.headers


@responses.activate
def test_csrf_header_comes_from_cookie() -> None:
    responses.add(responses.POST, f"{BASE}/api/auth/logout/", json={"success": True}, status=200)
    http = _http()
    http.session.cookies.set("csrftoken", "csrf-123")
    http.request("POST", "/api/auth/logout/")
    assert responses.calls[0].request.headers["X-CSRFToken"] == "csrf-123"


@responses.activate
def test_no_csrf_header_without_cookie() -> None:
    responses.add(responses.POST, f"{BASE}/api/auth/logout/", json={"success": True}, status=200)
    _http().request("POST", "/api/auth/logout/")
    assert "X-CSRFToken" not in responses.calls[0].request.headers


@responses.activate
def test_detail_takes_precedence_over_error_and_message() -> None:
    responses.add(
        responses.POST,
        f"{BASE}/api/turnos/abrir/",
        json={"detail": "detalle", "error": "error", "message": "mensaje"},
        status=400,
    )
    with pytest.raises(ValidationError) as exc_info:
        _http().request("POST", "/api/turnos/abrir/", json_body={"sucursal_id": 1})
    assert exc_info.value.message == "detalle"
    assert exc_info.value.status == 400


def test_message_precedence_falls_back_to_reason() -> None:
    assert extract_message({"error": "e", "message": "m"}) == "e"
    assert extract_message({"message": "m"}) == "m"
    assert extract_message({}, "Not Found") == "Not Found"
    assert isinstance(map_error(404, {}, "Not Found"), NotFoundError)
    assert isinstance(map_error(401, {"detail": "x"}), AuthError)


@responses.activate
def test_non_json_body_becomes_error_text() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/api/auth/inventario/",
        body="<h1>Server Error</h1>",
        status=500,
        content_type="text/html",
    )
    with pytest.raises(ServerError) as exc_info:
        _http().request("GET", "/api/auth/inventario/")
    assert exc_info.value.message == "<h1>Server Error</h1>"


@responses.activate
def test_transport_failure_has_status_zero() -> None:
    responses.add(responses.GET, f"{BASE}/api/auth/me/", body=requests.ConnectionError("sin red"))
    with pytest.raises(TransportError) as exc_info:
        _http().request("GET", "/api/auth/me/")
    assert exc_info.value.status == 0


@responses.activate
def test_get_is_retried_on_server_error() -> None:
    responses.add(responses.GET, f"{BASE}/api/auth/me/", json={"detail": "caido"}, status=503)
    responses.add(responses.GET, f"{BASE}/api/auth/me/", json={"id": 1, "username": "ana"}, status=200)
    payload = _http(retries=1).request("GET", "/api/auth/me/")
    assert payload == {"id": 1, "username": "ana"}
    assert len(responses.calls) == 2


@responses.activate
def test_mutations_are_not_retried() -> None:
    responses.add(responses.POST, f"{BASE}/api/ventas/pos/", json={"detail": "caido"}, status=503)
    with pytest.raises(ServerError):
        _http(retries=3).request("POST", "/api/ventas/pos/", json_body={})
    assert len(responses.calls) == 1


@responses.activate
def test_get_cache_is_invalidated_by_mutation() -> None:
    responses.add(responses.GET, f"{BASE}/api/clientes/", json={"results": [{"id": 1}]}, status=200)
    responses.add(responses.POST, f"{BASE}/api/clientes/", json={"id": 2}, status=201)
    http = _http()
    http.request("GET", "/api/clientes/")
    http.request("GET", "/api/clientes/")
    assert len(responses.calls) == 1
    http.request("POST", "/api/clientes/", json_body={}, invalidate_paths=["/api/clientes/"])
    http.request("GET", "/api/clientes/")
    assert len(responses.calls) == 3


@responses.activate
def test_download_bypasses_cache_and_maps_failures() -> None:
    url = f"{BASE}/api/auth/inventario/plantilla/"
    responses.add(responses.GET, url, body=b"PK", status=200, content_type="application/octet-stream")
    responses.add(responses.GET, url, body=b"PK2", status=200, content_type="application/octet-stream")
    responses.add(responses.GET, url, body=b"", status=404)
    http = _http()
    assert http.download("/api/auth/inventario/plantilla/") == b"PK"
    assert http.download("/api/auth/inventario/plantilla/") == b"PK2"
    with pytest.raises(NotFoundError):
        http.download("/api/auth/inventario/plantilla/")
    assert len(responses.calls) == 3
