# backend/storefront/schemas/category_schema.py
"""
Esquemas Pydantic para las categorías del catálogo.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator


class CategoryCreate(BaseModel):
    """Esquema para crear una categoría."""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError("Category name is required")
        return v.strip()


class CategoryResponse(BaseModel):
    """Esquema de respuesta de una categoría."""
    id: int
    name: str
    created_at: int

    model_config = ConfigDict(from_attributes=True)
