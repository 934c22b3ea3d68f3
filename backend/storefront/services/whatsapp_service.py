# backend/storefront/services/whatsapp_service.py
"""
Mensaje de pedido para WhatsApp.

Compone el texto del pedido en un orden fijo y lo codifica para abrir el
chat de la tienda con el mensaje ya escrito.
"""
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from storefront.core.config import Settings, settings as default_settings
from storefront.schemas.order_schema import CheckoutPayload
from storefront.utils.formatters import money


def build_order_message(
    payload: CheckoutPayload,
    payment_link: str,
    timestamp: datetime,
    settings: Settings = default_settings,
) -> str:
    """Texto plano del pedido, con el formato de negritas de WhatsApp."""
    total = money(payload.total_amount, settings.CURRENCY_SYMBOL)
    parts = [
        f"*New Order from {settings.STORE_NAME}*",
        "",
        f"*Customer Name:* {payload.customer_name}",
        "",
        "*Order Details:*",
        *payload.summary_lines,
        "",
        f"*Total Amount:* {total}",
        f"*Order ID:* {payload.order_id}",
        "",
        "*Pay securely here:*",
        payment_link,
        "",
        f"*Timestamp:* {timestamp.strftime('%d/%m/%Y, %H:%M:%S')}",
    ]
    return "\n".join(parts)


def build_whatsapp_url(
    payload: CheckoutPayload,
    payment_link: str,
    timestamp: Optional[datetime] = None,
    settings: Settings = default_settings,
) -> str:
    """URL wa.me con el mensaje del pedido codificado en `text`."""
    message = build_order_message(payload, payment_link, timestamp or datetime.now(), settings)
    return f"{settings.WHATSAPP_BASE_URL}/{settings.WHATSAPP_NUMBER}?text={quote(message, safe='')}"
