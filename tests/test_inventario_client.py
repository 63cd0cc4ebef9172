from __future__ import annotations

import io
import json

import pytest
import responses
from responses import matchers

from ledgerx_client_sdk import (
    ClientConfig,
    HttpClient,
    InventarioAgrupadoResponse,
    InventarioClient,
    InventarioDetalleResponse,
    InventarioQuery,
    parse_inventario_response,
)
from ledgerx_client_sdk.exceptions import InsufficientStockError

BASE = "https://api.example.com"
INVENTORY_URL = f"{BASE}/api/auth/inventario/"


def _client() -> InventarioClient:
    return InventarioClient(http=HttpClient(ClientConfig(env_name="test", api_base_url=BASE, tenant="empresa", retries=0)))


@responses.activate
def test_agrupado_flag_round_trip() -> None:
    responses.add(
        responses.GET,
        INVENTORY_URL,
        match=[matchers.query_param_matcher({"agrupado": "true"})],
        json={
            "mode": "agrupado",
            "count": 1,
            "results": [
                {
                    "id": 5,
                    "producto_nombre": "Martillo",
                    "stock_total_global": 12,
                    "desglose": [
                        {"sucursal": 1, "sucursal_nombre": "Matriz", "cantidad": 8},
                        {"sucursal": 2, "sucursal_nombre": "Norte", "cantidad": 4},
                    ],
                }
            ],
        },
        status=200,
    )
    response = _client().get_inventario(InventarioQuery(agrupado=True))
    assert isinstance(response, InventarioAgrupadoResponse)
    assert response.results[0].stock_total_global == 12
    assert len(response.results[0].desglose) == 2


@responses.activate
def test_detalle_query_encodes_false_flag() -> None:
    responses.add(
        responses.GET,
        INVENTORY_URL,
        match=[matchers.query_param_matcher({"sucursal": "2", "agrupado": "false"})],
        json={"mode": "detalle", "count": 1, "results": [{"id": 9, "producto": 5, "sucursal": 2, "cantidad": 3}]},
        status=200,
    )
    response = _client().get_inventario(InventarioQuery(sucursal=2, agrupado=False, search=""))
    assert isinstance(response, InventarioDetalleResponse)
    assert response.results[0].cantidad == 3


def test_server_declared_mode_wins_and_missing_mode_is_detalle() -> None:
    grouped = parse_inventario_response({"mode": "agrupado", "results": [{"id": 1}]})
    assert isinstance(grouped, InventarioAgrupadoResponse)
    legacy = parse_inventario_response({"results": [{"id": 1, "producto": 2, "sucursal": 3}]})
    assert isinstance(legacy, InventarioDetalleResponse)


@responses.activate
def test_transfer_payload_includes_carrier_only_with_guia() -> None:
    responses.add(responses.POST, f"{INVENTORY_URL}transferencia/", json={"success": True}, status=200)
    responses.add(responses.POST, f"{INVENTORY_URL}transferencia/", json={"success": True}, status=200)
    client = _client()
    client.transferencia(
        {
            "producto_id": 5,
            "origen_id": 1,
            "destino_id": 2,
            "cantidad": 3,
            "generar_guia": True,
            "transportista": {"ruc": "1790012345001", "razon_social": "Transportes SA", "placa": "PBA-1234"},
        }
    )
    client.transferencia({"producto_id": 5, "origen_id": 1, "destino_id": 2, "cantidad": 3})
    with_guia = json.loads(responses.calls[0].request.body)
    without_guia = json.loads(responses.calls[1].request.body)
    assert with_guia["generar_guia"] is True
    assert with_guia["transportista"]["razon_social"] == "Transportes SA"
    assert without_guia["generar_guia"] is False
    assert "transportista" not in without_guia


@responses.activate
def test_ajuste_insufficient_stock_is_mapped() -> None:
    responses.add(responses.POST, f"{INVENTORY_URL}ajuste/", json={"error": "Stock insuficiente en sucursal"}, status=400)
    with pytest.raises(InsufficientStockError):
        _client().ajuste({"producto_id": 5, "sucursal_id": 1, "tipo": "SALIDA", "cantidad": 50, "motivo": "merma"})


@responses.activate
def test_carga_masiva_row_errors_are_returned() -> None:
    responses.add(
        responses.POST,
        f"{INVENTORY_URL}carga-masiva/",
        json={"success": False, "errors": ["Fila 2: producto no existe", "Fila 5: cantidad inválida"]},
        status=400,
    )
    handle = io.BytesIO(b"codigo,cantidad\n")
    handle.name = "stock.csv"
    response = _client().carga_masiva(handle, 3)
    assert response.success is False
    assert response.error_summary == "Error: Fila 2: producto no existe, Fila 5: cantidad inválida"
    body = responses.calls[0].request.body
    assert b'name="sucursal_id"' in body
    assert b'filename="stock.csv"' in body


@responses.activate
def test_carga_masiva_success(tmp_path) -> None:
    responses.add(
        responses.POST,
        f"{INVENTORY_URL}carga-masiva/",
        json={"success": True, "message": "Se actualizaron 4 productos"},
        status=200,
    )
    path = tmp_path / "stock.xlsx"
    path.write_bytes(b"xlsx")
    response = _client().carga_masiva(path, 1)
    assert response.success is True
    assert response.message == "Se actualizaron 4 productos"


@responses.activate
def test_descargar_plantilla_returns_bytes() -> None:
    responses.add(
        responses.GET,
        f"{INVENTORY_URL}plantilla/",
        body=b"PK\x03\x04",
        status=200,
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    assert _client().descargar_plantilla() == b"PK\x03\x04"


@responses.activate
def test_transfer_to_same_branch_never_reaches_backend() -> None:
    with pytest.raises(ValueError, match="no pueden ser la misma"):
        _client().transferencia({"producto_id": 5, "origen_id": "3", "destino_id": 3, "cantidad": 1})
    assert len(responses.calls) == 0
