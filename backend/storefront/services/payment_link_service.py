# backend/storefront/services/payment_link_service.py
"""
Servicio de Enlaces de Pago (Razorpay).

Crea un enlace de pago corto para un pedido. Las credenciales de Razorpay
solo existen en el servidor. No hay reintentos: cualquier fallo se devuelve
como ExternalServiceFailed y el llamador decide qué hacer.
"""
import json
import logging
from typing import List, Optional

import httpx

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import ExternalServiceFailed
from storefront.schemas.order_schema import ManifestItem

logger = logging.getLogger(__name__)


class PaymentLinkService:

    def __init__(self, settings: Settings = default_settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # transport permite sustituir la red en tests (httpx.MockTransport)
        self.transport = transport

    def _build_body(self, amount: float, customer_name: str, order_id: str, items: List[ManifestItem]) -> dict:
        return {
            "amount": int(round(amount * 100)),  # en paise
            "currency": self.settings.CURRENCY,
            "description": f"Payment for order {order_id}",
            "reference_id": order_id,
            "customer": {"name": customer_name},
            "notify": {"sms": False, "email": False},
            "reminder_enable": False,
            "notes": {
                "order_id": order_id,
                "items": json.dumps([item.model_dump() for item in items]),
            },
        }

    async def create_payment_link(
        self,
        amount: float,
        customer_name: str,
        order_id: str,
        items: List[ManifestItem],
    ) -> str:
        """Devuelve la `short_url` del enlace de pago creado."""
        if not self.settings.RAZORPAY_KEY_ID or not self.settings.RAZORPAY_KEY_SECRET:
            raise ExternalServiceFailed("Payment gateway is not configured")

        url = f"{self.settings.RAZORPAY_API_URL}/payment_links"
        body = self._build_body(amount, customer_name, order_id, items)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.PAYMENT_LINK_TIMEOUT,
                auth=(self.settings.RAZORPAY_KEY_ID, self.settings.RAZORPAY_KEY_SECRET),
                transport=self.transport,
            ) as client:
                response = await client.post(url, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Error de Razorpay para el pedido {order_id}: {e.response.status_code} - {e.response.text}")
            raise ExternalServiceFailed(details=e.response.text, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Error de red creando el enlace de pago del pedido {order_id}: {e}")
            raise ExternalServiceFailed(details=str(e)) from e
        except ValueError as e:
            logger.error(f"Respuesta no JSON de Razorpay para el pedido {order_id}: {e}")
            raise ExternalServiceFailed(details=str(e)) from e

        short_url = data.get("short_url")
        if not short_url:
            logger.error(f"Razorpay no devolvió short_url para el pedido {order_id}: {data}")
            raise ExternalServiceFailed(details="Missing short_url in gateway response")
        return short_url
