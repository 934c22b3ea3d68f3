"""
Endpoints REST para las categorías del catálogo.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from storefront.api import deps
from storefront.crud import category_crud
from storefront.schemas import category_schema

router = APIRouter()

@router.get("/", response_model=List[category_schema.CategoryResponse])
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
) -> List[category_schema.CategoryResponse]:
    """Obtiene todas las categorías ordenadas por nombre."""
    return await category_crud.get_categories(db)

@router.post(
    "/",
    response_model=category_schema.CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.require_admin)],
)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_in: category_schema.CategoryCreate,
) -> category_schema.CategoryResponse:
    """Crea una nueva categoría."""
    if await category_crud.get_category_by_name(db, category_in.name):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category '{category_in.name}' already exists."
        )
    return await category_crud.create_category(db, category_in)

@router.delete(
    "/{category_id}",
    response_model=category_schema.CategoryResponse,
    dependencies=[Depends(deps.require_admin)],
)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int,
) -> category_schema.CategoryResponse:
    """Elimina una categoría."""
    deleted_category = await category_crud.delete_category(db, category_id)
    if not deleted_category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found for deletion")
    return deleted_category
