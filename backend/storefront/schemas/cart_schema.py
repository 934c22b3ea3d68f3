# backend/storefront/schemas/cart_schema.py
"""
Esquemas Pydantic para la gestión del carrito de la compra.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field

from .product_schema import CatalogItem


class CartLine(CatalogItem):
    """
    Una selección distinta (producto + variante) del carrito.

    Guarda una copia del producto en el momento de añadirlo: el precio y el
    stock usados después son los de esta copia, no los del catálogo en vivo.
    """
    selected_variant: Optional[str] = None
    requested_quantity: int = Field(..., gt=0)

    @property
    def identity_key(self) -> Tuple[str, Optional[str]]:
        return (self.id, self.selected_variant)

    @property
    def line_total(self) -> float:
        return self.offer_price * self.requested_quantity


class CartState(BaseModel):
    """Estado completo del carrito. El orden de `lines` es el orden de inserción."""
    lines: List[CartLine] = Field(default_factory=list)

    def total_items(self) -> int:
        return sum(line.requested_quantity for line in self.lines)

    def total_price(self) -> float:
        return sum(line.line_total for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines


# ========================================
# ESQUEMAS DE LA API
# ========================================

class CartItemCreate(BaseModel):
    """Esquema para añadir un item al carrito."""
    product_id: str
    variant: Optional[str] = None


class CartQuantityUpdate(BaseModel):
    """Nueva cantidad para una línea. Cero o negativo elimina la línea."""
    quantity: int


class Cart(BaseModel):
    """Esquema que representa el estado completo del carrito."""
    lines: List[CartLine]
    total_items: int
    total_price: float
    persisted: bool = True
