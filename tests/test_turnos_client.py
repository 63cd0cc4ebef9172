from __future__ import annotations

import json

import pytest
import responses

from ledgerx_client_sdk import AuthClient, ClientConfig, HttpClient, TurnosClient
from ledgerx_client_sdk.exceptions import ShiftAlreadyOpenError, ShiftNotOpenError, ValidationError

BASE = "https://api.example.com"


def _http() -> HttpClient:
    return HttpClient(ClientConfig(env_name="test", api_base_url=BASE, tenant="empresa", retries=0))


@responses.activate
def test_verificar_turno_active_shape() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/api/turnos/verificar/",
        json={"success": True, "activo": True, "data": {"id": 7, "sucursal": 2, "sucursal_nombre": "Matriz", "inicio_turno": "2024-05-01T08:00:00"}},
        status=200,
    )
    status = TurnosClient(http=_http()).verificar_turno()
    assert status.activo is True
    assert status.turno is not None
    assert status.turno.id == 7
    assert status.turno.sucursal == 2


@responses.activate
def test_verificar_turno_inactive() -> None:
    responses.add(responses.GET, f"{BASE}/api/turnos/verificar/", json={"success": True, "activo": False, "data": None}, status=200)
    status = TurnosClient(http=_http()).verificar_turno()
    assert status.activo is False
    assert status.turno is None


@responses.activate
def test_auth_turno_activo_legacy_shape() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/api/auth/turno-activo/",
        json={"tiene_turno_activo": True, "turno": {"id": 3, "sucursal": "Centro", "hora_inicio": "08:00"}},
        status=200,
    )
    status = AuthClient(http=_http()).turno_activo()
    assert status.activo is True
    assert status.turno.sucursal is None
    assert status.turno.sucursal_nombre == "Centro"
    assert status.turno.inicio_turno == "08:00"


@responses.activate
def test_abrir_turno_sends_branch_and_parses_turno() -> None:
    responses.add(
        responses.POST,
        f"{BASE}/api/turnos/abrir/",
        json={"success": True, "data": {"id": 11, "sucursal": 4}},
        status=201,
    )
    response = TurnosClient(http=_http()).abrir_turno(4)
    assert json.loads(responses.calls[0].request.body) == {"sucursal_id": 4}
    assert response.data.id == 11


@responses.activate
def test_abrir_turno_already_open_is_mapped() -> None:
    responses.add(responses.POST, f"{BASE}/api/turnos/abrir/", json={"error": "El usuario ya tiene un turno abierto"}, status=400)
    with pytest.raises(ShiftAlreadyOpenError):
        TurnosClient(http=_http()).abrir_turno(4)


@responses.activate
def test_cerrar_turno_without_shift_is_mapped() -> None:
    responses.add(responses.POST, f"{BASE}/api/turnos/cerrar/", json={"error": "No tiene un turno abierto"}, status=400)
    with pytest.raises(ShiftNotOpenError):
        TurnosClient(http=_http()).cerrar_turno({"efectivo_total": 10})


@responses.activate
def test_unrelated_validation_error_is_not_remapped() -> None:
    responses.add(responses.POST, f"{BASE}/api/turnos/cerrar/", json={"error": "Monto inválido"}, status=400)
    with pytest.raises(ValidationError) as exc_info:
        TurnosClient(http=_http()).cerrar_turno({"efectivo_total": 10})
    assert not isinstance(exc_info.value, (ShiftNotOpenError, ShiftAlreadyOpenError))


@responses.activate
def test_historico_accepts_bare_list() -> None:
    responses.add(responses.GET, f"{BASE}/api/turnos/", json=[{"id": 1, "estado": "CERRADO"}], status=200)
    response = TurnosClient(http=_http()).historico({"page": 1})
    assert response.count == 1
    assert response.results[0].id == 1


@responses.activate
def test_negative_close_amounts_are_rejected_before_request() -> None:
    with pytest.raises(ValueError):
        TurnosClient(http=_http()).cerrar_turno({"efectivo_total": 10, "salidas_caja": -5})
    assert len(responses.calls) == 0
