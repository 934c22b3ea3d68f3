# backend/storefront/schemas/product_schema.py
"""
Esquemas Pydantic para los productos del catálogo.

El catálogo es de solo lectura para el carrito: de cada producto el carrito
solo necesita id, título, precios, variantes de color y cantidad disponible.
"""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator


def _split_csv(value):
    """El formulario de administración envía imágenes y colores separados por comas."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de producto."""
    title: str = Field(..., min_length=1)
    category: str
    description: Optional[str] = None
    original_price: float = Field(..., ge=0)
    offer_price: float = Field(..., ge=0)
    images: List[str] = Field(default_factory=list)
    color_variants: Optional[List[str]] = None
    quantity: int = Field(0, ge=0)

    @field_validator("images", "color_variants", mode="before")
    @classmethod
    def parse_csv_lists(cls, value):
        return _split_csv(value)

    @field_validator("color_variants")
    @classmethod
    def empty_variants_to_none(cls, value):
        return value or None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductCreate(ProductBase):
    """Esquema para crear un producto. El id es opcional; si falta se genera."""
    id: Optional[str] = None


class ProductUpdate(BaseModel):
    """Esquema para actualizar un producto. Todos los campos son opcionales."""
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    original_price: Optional[float] = Field(None, ge=0)
    offer_price: Optional[float] = Field(None, ge=0)
    images: Optional[List[str]] = None
    color_variants: Optional[List[str]] = None
    quantity: Optional[int] = Field(None, ge=0)

    @field_validator("images", "color_variants", mode="before")
    @classmethod
    def parse_csv_lists(cls, value):
        return _split_csv(value)


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class CatalogItem(ProductBase):
    """
    Producto tal y como lo expone el catálogo.

    `created_at` se guarda en milisegundos desde epoch.
    """
    id: str
    created_at: int = 0

    model_config = ConfigDict(from_attributes=True)

    @property
    def has_variants(self) -> bool:
        return bool(self.color_variants)


ProductResponse = CatalogItem
