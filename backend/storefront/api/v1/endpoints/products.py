# backend/storefront/api/v1/endpoints/products.py
"""
Endpoints REST del catálogo de productos.

La lectura es pública; crear, editar y borrar requiere el token de administración.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from storefront.api import deps
from storefront.crud import product_crud
from storefront.schemas import product_schema

router = APIRouter()


@router.get("/", response_model=List[product_schema.ProductResponse])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    category: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[product_schema.ProductResponse]:
    """Lista los productos del catálogo, opcionalmente de una categoría."""
    products = await product_crud.get_products(db, category=category, skip=skip, limit=limit)
    return [product_schema.ProductResponse.model_validate(p.to_dict()) for p in products]


@router.get("/{product_id}", response_model=product_schema.ProductResponse)
async def read_product(
    product_id: str,
    db: AsyncSession = Depends(deps.get_db),
) -> product_schema.ProductResponse:
    """Obtiene los detalles de un producto."""
    item = await product_crud.get_catalog_item(db, product_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return item


@router.post(
    "/",
    response_model=product_schema.ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.require_admin)],
)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_in: product_schema.ProductCreate,
) -> product_schema.ProductResponse:
    """Crea un producto nuevo."""
    if product_in.id and await product_crud.get_product(db, product_in.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Product with ID {product_in.id} already exists."
        )
    product = await product_crud.create_product(db, product_in)
    return product_schema.ProductResponse.model_validate(product.to_dict())


@router.put(
    "/{product_id}",
    response_model=product_schema.ProductResponse,
    dependencies=[Depends(deps.require_admin)],
)
async def update_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: str,
    product_in: product_schema.ProductUpdate,
) -> product_schema.ProductResponse:
    """Actualiza un producto existente."""
    product = await product_crud.update_product(db, product_id, product_in)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found for update")
    return product_schema.ProductResponse.model_validate(product.to_dict())


@router.delete(
    "/{product_id}",
    response_model=product_schema.ProductResponse,
    dependencies=[Depends(deps.require_admin)],
)
async def delete_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: str,
) -> product_schema.ProductResponse:
    """Elimina un producto del catálogo."""
    product = await product_crud.delete_product(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found for deletion")
    return product_schema.ProductResponse.model_validate(product.to_dict())
