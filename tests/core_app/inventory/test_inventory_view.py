from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ledgerx_client_sdk import (
    CargaMasivaResponse,
    InventarioQuery,
    MutationResponse,
    Producto,
    ProductosListResponse,
    Sucursal,
    SucursalesListResponse,
    parse_inventario_response,
)
from ledgerx_client_sdk.exceptions import InsufficientStockError, ServerError
from ledgerx_client_sdk.inventory_validation import CARRIER_REQUIRED_MESSAGE, FILE_REQUIRED_MESSAGE, SAME_BRANCH_MESSAGE

from ledgerx_core_app.services.inventario_service import InventarioService
from ledgerx_core_app.ui.inventory.import_dialog import OVERWRITE_NOTICE
from ledgerx_core_app.ui.inventory.inventory_view import (
    ADJUSTMENT_SUCCESS,
    TRANSFER_SUCCESS,
    UNSUPPORTED_FILE_MESSAGE,
    InventoryView,
)
from ledgerx_core_app.ui.inventory.workflow import WorkflowStatus

GROUPED = {
    "mode": "agrupado",
    "count": 1,
    "results": [
        {
            "id": 7,
            "producto_nombre": "Producto X",
            "producto_codigo": "PX-1",
            "stock_total_global": 42,
            "desglose": [
                {"id": 70, "sucursal": 1, "sucursal_nombre": "Matriz", "cantidad": 30},
                {"id": 71, "sucursal": 2, "sucursal_nombre": "Norte", "cantidad": 12},
            ],
        }
    ],
}


def _detail(sucursal: int) -> dict[str, Any]:
    return {
        "mode": "detalle",
        "count": 1,
        "results": [
            {"id": 100 + sucursal, "producto": 7, "producto_nombre": "Producto X", "sucursal": sucursal, "sucursal_nombre": "Matriz", "cantidad": 30}
        ],
    }


@dataclass
class FakeInventarioClient:
    force_mode: str | None = None
    ajuste_error: Exception | None = None
    carga_response: CargaMasivaResponse = field(
        default_factory=lambda: CargaMasivaResponse(success=True, message="Se actualizaron 2 productos")
    )
    template: bytes = b"PK\x03\x04"
    queries: list[InventarioQuery] = field(default_factory=list)
    ajustes: list[Any] = field(default_factory=list)
    transferencias: list[Any] = field(default_factory=list)
    cargas: list[tuple[Any, int]] = field(default_factory=list)

    def get_inventario(self, query: InventarioQuery):
        self.queries.append(query)
        if self.force_mode == "agrupado" or (self.force_mode is None and query.agrupado):
            return parse_inventario_response(GROUPED)
        return parse_inventario_response(_detail(query.sucursal or 1))

    def ajuste(self, payload: Any) -> MutationResponse:
        if self.ajuste_error:
            raise self.ajuste_error
        self.ajustes.append(payload)
        return MutationResponse(success=True)

    def transferencia(self, payload: Any) -> MutationResponse:
        self.transferencias.append(payload)
        return MutationResponse(success=True)

    def carga_masiva(self, file: Any, sucursal_id: int) -> CargaMasivaResponse:
        self.cargas.append((file, sucursal_id))
        return self.carga_response

    def descargar_plantilla(self) -> bytes:
        return self.template


@dataclass
class FakeSucursalesClient:
    error: Exception | None = None

    def get_sucursales(self, **kwargs: Any) -> SucursalesListResponse:
        if self.error:
            raise self.error
        return SucursalesListResponse(results=[Sucursal(id=1, nombre="Matriz"), Sucursal(id=2, nombre="Norte")])


@dataclass
class FakeProductosClient:
    def get_productos(self, query: Any = None) -> ProductosListResponse:
        return ProductosListResponse(results=[Producto(id=7, nombre="Producto X", stock=42)])


@dataclass
class FakeSession:
    inventario: FakeInventarioClient = field(default_factory=FakeInventarioClient)
    sucursales: FakeSucursalesClient = field(default_factory=FakeSucursalesClient)
    productos: FakeProductosClient = field(default_factory=FakeProductosClient)

    def inventario_client(self) -> FakeInventarioClient:
        return self.inventario

    def sucursales_client(self) -> FakeSucursalesClient:
        return self.sucursales

    def productos_client(self) -> FakeProductosClient:
        return self.productos


def _view(session: FakeSession) -> InventoryView:
    view = InventoryView(service=InventarioService(session))
    assert view.load_data() is True
    return view


def test_grouped_view_expands_and_branch_filter_switches_to_detail() -> None:
    session = FakeSession()
    view = _view(session)

    assert session.inventario.queries[0].agrupado is True
    assert session.inventario.queries[0].sucursal is None
    table = view.render()["table"]
    row = table["rows"][0]
    assert table["mode"] == "agrupado"
    assert row["stock"] == 42
    assert row["sucursal"] == "Global (2 sucursales)"
    assert row["can_adjust"] is False
    assert row["desglose"] == []

    assert view.toggle_expand(7) is True
    expanded = view.render()["table"]["rows"][0]
    assert [sub["stock"] for sub in expanded["desglose"]] == [30, 12]
    assert [sub["sucursal"] for sub in expanded["desglose"]] == ["Matriz", "Norte"]

    assert view.set_branch_filter(1) is True
    assert session.inventario.queries[-1].agrupado is False
    assert session.inventario.queries[-1].sucursal == 1
    detail = view.render()
    assert detail["mode"] == "detalle"
    assert detail["table"]["rows"][0]["can_adjust"] is True
    assert view.open_adjustment(101)["ok"] is True
    assert view.adjustment.values["producto_id"] == 7
    assert view.adjustment.values["sucursal_id"] == 1


def test_rendering_follows_server_declared_mode() -> None:
    session = FakeSession(inventario=FakeInventarioClient(force_mode="agrupado"))
    view = InventoryView(service=InventarioService(session), selected_sucursal=2)
    view.load_data()
    assert session.inventario.queries[0].agrupado is False
    assert view.mode == "agrupado"
    assert view.render()["table"]["rows"][0]["can_adjust"] is False


def test_adjustment_is_not_offered_on_grouped_rows() -> None:
    view = _view(FakeSession())
    result = view.open_adjustment(7)
    assert result["ok"] is False
    assert view.adjustment.is_open is False


def test_generic_adjustment_prefills_first_product_and_branch() -> None:
    session = FakeSession()
    view = _view(session)
    view.open_adjustment()
    assert view.adjustment.values["producto_id"] == 7
    assert view.adjustment.values["sucursal_id"] == 1
    assert view.adjustment.values["tipo"] == "ENTRADA"

    missing = view.submit_adjustment(cantidad="", motivo="")
    assert missing["ok"] is False
    assert set(missing["field_errors"]) == {"cantidad", "motivo"}
    assert session.inventario.ajustes == []

    queries_before = len(session.inventario.queries)
    result = view.submit_adjustment(tipo="SALIDA", cantidad="5", motivo=" conteo físico ")
    assert result == {"ok": True, "message": ADJUSTMENT_SUCCESS}
    sent = session.inventario.ajustes[0]
    assert (sent.producto_id, sent.sucursal_id, sent.tipo, sent.cantidad, sent.motivo) == (7, 1, "SALIDA", 5.0, "conteo físico")
    assert view.adjustment.status is WorkflowStatus.CLOSED
    assert view.success_message == ADJUSTMENT_SUCCESS
    assert len(session.inventario.queries) == queries_before + 1


def test_failed_adjustment_keeps_dialog_open_with_error() -> None:
    session = FakeSession(
        inventario=FakeInventarioClient(ajuste_error=InsufficientStockError(message="Stock insuficiente", status=400))
    )
    view = _view(session)
    view.open_adjustment()
    result = view.submit_adjustment(tipo="SALIDA", cantidad="500", motivo="merma")
    assert result["ok"] is False
    assert result["error"] == "Stock insuficiente"
    assert view.adjustment.status is WorkflowStatus.OPEN
    assert view.adjustment.error_message == "Stock insuficiente"


def test_transfer_rejects_same_branch_before_network() -> None:
    session = FakeSession()
    view = _view(session)
    view.open_transfer()

    untouched = view.submit_transfer()
    assert untouched["error"] == SAME_BRANCH_MESSAGE

    same = view.submit_transfer(producto_id=7, origen_id=2, destino_id=2, cantidad="3")
    assert same["error"] == SAME_BRANCH_MESSAGE

    mixed = view.submit_transfer(producto_id=7, origen_id="2", destino_id=2, cantidad="3")
    assert mixed["ok"] is False
    assert mixed["error"] == SAME_BRANCH_MESSAGE
    assert session.inventario.transferencias == []
    assert view.transfer.is_open is True


def test_transfer_with_guide_requires_carrier() -> None:
    session = FakeSession()
    view = _view(session)
    view.open_transfer()

    result = view.submit_transfer(producto_id=7, origen_id=1, destino_id=2, cantidad="3", generar_guia=True)
    assert result["error"] == CARRIER_REQUIRED_MESSAGE
    assert session.inventario.transferencias == []

    done = view.submit_transfer(transportista_ruc="1790012345001", transportista_razon_social="Transportes SA")
    assert done == {"ok": True, "message": TRANSFER_SUCCESS}
    sent = session.inventario.transferencias[0]
    assert sent.generar_guia is True
    assert sent.transportista.ruc == "1790012345001"
    assert sent.transportista.placa is None
    assert view.transfer.is_open is False
    assert view.notifications.last["message"] == TRANSFER_SUCCESS


def test_transfer_without_guide_skips_carrier() -> None:
    session = FakeSession()
    view = _view(session)
    view.open_transfer()
    assert view.submit_transfer(producto_id=7, origen_id=1, destino_id=2, cantidad="1")["ok"] is True
    assert session.inventario.transferencias[0].transportista is None


def test_import_validates_file_and_reports_row_errors() -> None:
    session = FakeSession(
        inventario=FakeInventarioClient(
            carga_response=CargaMasivaResponse(success=False, errors=["Fila 2: producto no existe", "Fila 4: cantidad inválida"])
        )
    )
    view = _view(session)
    dialog = view.open_import()["dialog"]
    assert dialog["notice"] == OVERWRITE_NOTICE
    assert dialog["values"]["sucursal_id"] == 1

    assert view.submit_import()["error"] == FILE_REQUIRED_MESSAGE
    assert view.submit_import("reporte.pdf")["error"] == UNSUPPORTED_FILE_MESSAGE
    assert session.inventario.cargas == []

    rejected = view.submit_import("stock.xlsx", sucursal_id=2)
    assert rejected["ok"] is False
    assert rejected["error"] == "Error: Fila 2: producto no existe, Fila 4: cantidad inválida"
    assert session.inventario.cargas == [("stock.xlsx", 2)]
    assert view.importer.is_open is True


def test_import_success_reloads_with_server_message() -> None:
    session = FakeSession()
    view = _view(session)
    view.open_import()
    result = view.submit_import("stock.csv")
    assert result == {"ok": True, "message": "Se actualizaron 2 productos"}
    assert view.importer.is_open is False


def test_dropdown_failures_do_not_block_inventory() -> None:
    session = FakeSession(sucursales=FakeSucursalesClient(error=ServerError(message="caido", status=503)))
    view = _view(session)
    assert view.sucursales == []
    assert [row.id for row in view.productos] == [7]
    assert view.render()["table"]["count"] == 1
    assert view.error_message is None


def test_download_template_writes_file(tmp_path) -> None:
    view = _view(FakeSession())
    result = view.download_template(tmp_path)
    assert result["ok"] is True
    assert (tmp_path / "plantilla_inventario.xlsx").read_bytes() == b"PK\x03\x04"


def test_stale_inventory_response_is_discarded() -> None:
    session = FakeSession()
    view = InventoryView(service=InventarioService(session))

    class RacingInventario(FakeInventarioClient):
        def get_inventario(self, query: InventarioQuery):
            if query.search == "viejo":
                session.inventario = FakeInventarioClient()
                view.set_branch_filter(2)
                return parse_inventario_response(GROUPED)
            return super().get_inventario(query)

    session.inventario = RacingInventario()
    view.search_term = "viejo"
    assert view.load_data() is False
    assert view.mode == "detalle"
    assert view.response.results[0].sucursal == 2
