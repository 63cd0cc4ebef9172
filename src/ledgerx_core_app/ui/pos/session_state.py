"""Cashier working set: shift, cart and customer selection.

Every transition is a pure function from one :class:`PosSessionState` to the
next so the rules can be exercised without a view. Rule violations raise
:class:`CartRejected` and leave the input state untouched.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum

from ledgerx_client_sdk import Cliente, Presentacion, Producto, Turno, consumidor_final

CUSTOMER_DATA_THRESHOLD = Decimal("50")

OUT_OF_STOCK_MESSAGE = "Producto agotado"
NO_PRESENTATION_MESSAGE = "Este producto no tiene presentaciones/precios definidos"
CUSTOMER_REQUIRED_MESSAGE = (
    "Para ventas mayores a $50, debe ingresar los datos del cliente (Facturación Electrónica)."
)


class PosPhase(str, Enum):
    NO_SHIFT = "no_shift"
    SHIFT_OPEN = "shift_open"
    CHECKOUT = "checkout"


class CartRejected(ValueError):
    pass


@dataclass(frozen=True)
class CartLine:
    producto_id: int
    producto_nombre: str
    presentacion_id: int
    presentacion_nombre: str
    cantidad: int
    precio: Decimal
    impuesto: Decimal = Decimal("0")

    @property
    def subtotal(self) -> Decimal:
        return self.precio * self.cantidad

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.impuesto


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    impuesto: Decimal
    total: Decimal


@dataclass(frozen=True)
class PosSessionState:
    phase: PosPhase = PosPhase.NO_SHIFT
    turno: Turno | None = None
    cart: tuple[CartLine, ...] = ()
    customer: Cliente = field(default_factory=consumidor_final)

    @property
    def has_shift(self) -> bool:
        return self.turno is not None and self.phase is not PosPhase.NO_SHIFT


def open_shift(state: PosSessionState, turno: Turno) -> PosSessionState:
    return replace(state, phase=PosPhase.SHIFT_OPEN, turno=turno)


def close_shift(state: PosSessionState) -> PosSessionState:
    return PosSessionState()


def quantity_in_cart(state: PosSessionState, producto_id: int) -> int:
    return sum(line.cantidad for line in state.cart if line.producto_id == producto_id)


def add_item(state: PosSessionState, producto: Producto, presentacion: Presentacion) -> PosSessionState:
    stock = Decimal(str(producto.stock or 0))
    if stock <= 0:
        raise CartRejected(OUT_OF_STOCK_MESSAGE)
    if quantity_in_cart(state, producto.id) + 1 > stock:
        raise CartRejected(f"No puedes agregar más de {_format_stock(stock)} unidades.")

    precio = Decimal(str(presentacion.precio))
    lines = list(state.cart)
    for index, line in enumerate(lines):
        if line.producto_id == producto.id and line.presentacion_id == presentacion.id:
            lines[index] = replace(line, cantidad=line.cantidad + 1, precio=precio)
            return replace(state, cart=tuple(lines))
    lines.append(
        CartLine(
            producto_id=producto.id,
            producto_nombre=producto.nombre or "",
            presentacion_id=presentacion.id,
            presentacion_nombre=presentacion.nombre_presentacion or "",
            cantidad=1,
            precio=precio,
        )
    )
    return replace(state, cart=tuple(lines))


def remove_item(state: PosSessionState, index: int) -> PosSessionState:
    if index < 0 or index >= len(state.cart):
        return state
    return replace(state, cart=state.cart[:index] + state.cart[index + 1 :])


def select_customer(state: PosSessionState, customer: Cliente) -> PosSessionState:
    return replace(state, customer=customer)


def totals(state: PosSessionState) -> CartTotals:
    subtotal = sum((line.subtotal for line in state.cart), Decimal("0"))
    impuesto = sum((line.impuesto for line in state.cart), Decimal("0"))
    total = sum((line.total for line in state.cart), Decimal("0"))
    return CartTotals(subtotal=subtotal, impuesto=impuesto, total=total)


def requires_customer_data(state: PosSessionState) -> bool:
    return totals(state).total > CUSTOMER_DATA_THRESHOLD and state.customer.is_consumidor_final


def begin_checkout(state: PosSessionState) -> PosSessionState:
    return replace(state, phase=PosPhase.CHECKOUT)


def finish_checkout(state: PosSessionState, *, success: bool) -> PosSessionState:
    if success:
        return replace(state, phase=PosPhase.SHIFT_OPEN, cart=(), customer=consumidor_final())
    return replace(state, phase=PosPhase.SHIFT_OPEN)


def _format_stock(stock: Decimal) -> str:
    return str(int(stock)) if stock == stock.to_integral_value() else str(stock)
