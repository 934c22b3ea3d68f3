# backend/storefront/schemas/order_schema.py
"""
Se encarga de definir los esquemas Pydantic del checkout y de los pedidos.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
import enum


class OrderStatus(str, enum.Enum):
    """Define los posibles estados de un pedido."""
    PENDING = "pending"
    DELIVERED = "delivered"


class ManifestItem(BaseModel):
    """Línea plana del pedido tal y como viaja en la petición de pago."""
    id: str
    title: str
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)
    variant: Optional[str] = None


class CheckoutPayload(BaseModel):
    """
    Datos derivados del carrito para iniciar el pago y avisar por WhatsApp.
    Se construye en cada intento de checkout y nunca se guarda.
    """
    order_id: str
    customer_name: str
    total_amount: float
    item_manifest: List[ManifestItem]
    summary_lines: List[str]
    summary_text: str


# ========================================
# ESQUEMAS DE LA API
# ========================================

class CheckoutRequest(BaseModel):
    customer_name: str = ""


class CheckoutResponse(BaseModel):
    order_id: str
    customer_name: str
    total_amount: float
    payment_link: str
    whatsapp_url: str


class PaymentLinkRequest(BaseModel):
    """Petición directa de enlace de pago."""
    amount: Optional[float] = None
    customer_name: Optional[str] = None
    order_id: Optional[str] = None
    items: List[ManifestItem] = Field(default_factory=list)


class PaymentLinkResponse(BaseModel):
    success: bool = True
    payment_link: str
    order_id: str


# ========================================
# PEDIDOS
# ========================================

class OrderCreate(BaseModel):
    """Esquema para registrar un pedido pendiente tras crear el enlace de pago."""
    order_id: str
    customer_name: str
    total_amount: float = Field(..., ge=0)
    items: List[ManifestItem] = Field(..., min_length=1)
    payment_link: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v):
        if not v or not v.strip():
            raise ValueError("El nombre del cliente es requerido")
        return v.strip()


class OrderResponse(BaseModel):
    """Esquema completo de respuesta para un pedido."""
    order_id: str
    customer_name: str
    total_amount: float
    items: List[ManifestItem]
    payment_link: Optional[str] = None
    status: OrderStatus
    created_at: int

    model_config = ConfigDict(from_attributes=True)
