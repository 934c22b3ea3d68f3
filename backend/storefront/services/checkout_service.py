# backend/storefront/services/checkout_service.py
"""
Servicio de Checkout de la tienda.

Contiene dos piezas:
- `build_payload`: deriva del carrito el id de pedido, la lista de items para
  el pago y el resumen legible. Es de solo lectura respecto al carrito.
- `CheckoutFlow`: la máquina de estados del checkout. Solo vacía el carrito
  cuando el servicio de pago ha devuelto un enlace.
"""
import asyncio
import enum
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import EmptyCart, MissingCustomerName
from storefront.schemas.cart_schema import CartLine, CartState
from storefront.schemas.order_schema import CheckoutPayload, ManifestItem
from storefront.services.cart_service import CartAggregator
from storefront.services.whatsapp_service import build_whatsapp_url
from storefront.utils.formatters import money

logger = logging.getLogger(__name__)

_last_order_ms = 0


def _next_order_ms(now_ms: Optional[int] = None) -> int:
    """Milisegundos actuales, estrictamente crecientes dentro del proceso."""
    global _last_order_ms
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    now_ms = max(now_ms, _last_order_ms + 1)
    _last_order_ms = now_ms
    return now_ms


def _summary_line(line: CartLine, currency_symbol: str) -> str:
    variant = f" ({line.selected_variant})" if line.selected_variant else ""
    return f"{line.title}{variant} x {line.requested_quantity} = {money(line.line_total, currency_symbol)}"


def build_payload(
    cart_state: CartState,
    customer_name: Optional[str],
    *,
    settings: Settings = default_settings,
    now_ms: Optional[int] = None,
) -> CheckoutPayload:
    """
    Construye el payload de checkout a partir de una foto del carrito.

    Raises:
        EmptyCart: el carrito no tiene líneas.
        MissingCustomerName: el nombre está vacío tras quitar espacios.
    """
    if cart_state.is_empty():
        raise EmptyCart()

    name = (customer_name or "").strip()
    if not name:
        raise MissingCustomerName()

    lines = list(cart_state.lines)
    summary_lines = [_summary_line(line, settings.CURRENCY_SYMBOL) for line in lines]

    return CheckoutPayload(
        order_id=f"{settings.ORDER_ID_PREFIX}{_next_order_ms(now_ms)}",
        customer_name=name,
        total_amount=cart_state.total_price(),
        item_manifest=[
            ManifestItem(
                id=line.id,
                title=line.title,
                quantity=line.requested_quantity,
                unit_price=line.offer_price,
                variant=line.selected_variant,
            )
            for line in lines
        ],
        summary_lines=summary_lines,
        summary_text=settings.SUMMARY_SEPARATOR.join(summary_lines),
    )


# ========================================
# FLUJO DE CHECKOUT
# ========================================

class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    BUILDING = "building"
    AWAITING_EXTERNAL_CONFIRMATION = "awaiting_external_confirmation"
    SUCCESS = "success"
    CART_CLEARED = "cart_cleared"
    FAILED = "failed"


@dataclass
class CheckoutResult:
    payload: CheckoutPayload
    payment_link: str
    whatsapp_url: str


class CheckoutFlow:
    """
    Orquesta un intento de checkout sobre un carrito:

    Idle -> Building -> AwaitingExternalConfirmation -> Success -> CartCleared
    y ante cualquier fallo -> Failed -> Idle con el carrito intacto.

    No hay reintentos: el usuario puede volver a intentarlo sin rehacer el carrito.
    """

    def __init__(
        self,
        cart: CartAggregator,
        payment_link_service,
        settings: Settings = default_settings,
        order_recorder: Optional[Callable[[CheckoutPayload, str], Awaitable[None]]] = None,
    ):
        self.cart = cart
        self.payment_link_service = payment_link_service
        self.settings = settings
        self.order_recorder = order_recorder
        self.state = CheckoutState.IDLE
        self.history: List[CheckoutState] = [CheckoutState.IDLE]

    def _transition(self, state: CheckoutState) -> None:
        self.state = state
        self.history.append(state)

    async def run(self, customer_name: Optional[str]) -> CheckoutResult:
        if self.state != CheckoutState.IDLE:
            raise RuntimeError(f"Checkout ya en curso (estado: {self.state.value})")

        try:
            self._transition(CheckoutState.BUILDING)
            payload = build_payload(self.cart.state, customer_name, settings=self.settings)

            self._transition(CheckoutState.AWAITING_EXTERNAL_CONFIRMATION)
            payment_link = await self.payment_link_service.create_payment_link(
                amount=payload.total_amount,
                customer_name=payload.customer_name,
                order_id=payload.order_id,
                items=payload.item_manifest,
            )
            if self.order_recorder is not None:
                await self.order_recorder(payload, payment_link)
        except BaseException:
            # Incluye la cancelación: el carrito no se toca
            self._transition(CheckoutState.FAILED)
            self._transition(CheckoutState.IDLE)
            raise

        self._transition(CheckoutState.SUCCESS)
        whatsapp_url = build_whatsapp_url(payload, payment_link, timestamp=datetime.now(), settings=self.settings)
        await asyncio.to_thread(self.cart.clear)
        self._transition(CheckoutState.CART_CLEARED)
        logger.info(f"Pedido {payload.order_id} confirmado para {payload.customer_name} ({payload.total_amount})")

        return CheckoutResult(payload=payload, payment_link=payment_link, whatsapp_url=whatsapp_url)
