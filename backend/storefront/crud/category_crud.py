# backend/storefront/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Las categorías son una lista plana de nombres únicos que el panel de
administración asigna a los productos.
"""

import time
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models.category_model import Category
from storefront.schemas import category_schema


async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    result = await db.execute(select(Category).filter(Category.id == category_id))
    return result.scalars().first()


async def get_category_by_name(db: AsyncSession, name: str) -> Optional[Category]:
    result = await db.execute(select(Category).filter(Category.name == name))
    return result.scalars().first()


async def get_categories(db: AsyncSession) -> List[Category]:
    """Todas las categorías ordenadas alfabéticamente."""
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


async def create_category(db: AsyncSession, category_in: category_schema.CategoryCreate) -> Category:
    db_category = Category(name=category_in.name, created_at=int(time.time() * 1000))
    db.add(db_category)
    await db.commit()
    await db.refresh(db_category)
    return db_category


async def delete_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    db_category = await get_category(db, category_id)
    if not db_category:
        return None
    await db.delete(db_category)
    await db.commit()
    return db_category
