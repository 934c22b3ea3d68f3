# backend/storefront/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Este módulo es el catálogo de la tienda: el carrito lo consulta para obtener
los productos que se añaden, y el panel de administración lo usa para crear,
editar y borrar productos.
"""

import logging
import time
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models.product_model import Product
from storefront.schemas import product_schema

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: str) -> Optional[Product]:
    """Obtiene un producto por su id."""
    result = await db.execute(select(Product).filter(Product.id == product_id))
    return result.scalars().first()


async def get_products(
    db: AsyncSession,
    category: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Product]:
    """
    Lista productos, los más recientes primero.

    Args:
        db: Sesión de SQLAlchemy
        category: Nombre de categoría para filtrar (opcional)
        skip: Número de registros a omitir
        limit: Máximo de registros a devolver
    """
    query = select(Product)
    if category:
        query = query.filter(Product.category == category)
    query = query.order_by(Product.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def get_catalog_item(db: AsyncSession, product_id: str) -> Optional[product_schema.CatalogItem]:
    """Devuelve el producto como CatalogItem, listo para el carrito."""
    product = await get_product(db, product_id)
    if not product:
        return None
    return product_schema.CatalogItem.model_validate(product.to_dict())

# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

async def create_product(db: AsyncSession, product_in: product_schema.ProductCreate) -> Product:
    """Crea un producto. Si no llega id se usa la marca de tiempo en milisegundos."""
    now_ms = int(time.time() * 1000)
    data = product_in.model_dump(exclude={"id"})
    db_product = Product(id=product_in.id or str(now_ms), created_at=now_ms, **data)
    db.add(db_product)
    await db.commit()
    await db.refresh(db_product)
    logger.info(f"Producto creado: {db_product.id} ({db_product.title})")
    return db_product


async def update_product(db: AsyncSession, product_id: str, product_in: product_schema.ProductUpdate) -> Optional[Product]:
    """Actualización parcial: solo cambian los campos enviados."""
    db_product = await get_product(db, product_id)
    if not db_product:
        return None

    for field, value in product_in.model_dump(exclude_unset=True).items():
        setattr(db_product, field, value)

    await db.commit()
    await db.refresh(db_product)
    return db_product


async def delete_product(db: AsyncSession, product_id: str) -> Optional[Product]:
    db_product = await get_product(db, product_id)
    if not db_product:
        return None
    await db.delete(db_product)
    await db.commit()
    return db_product


async def deduct_quantity(db: AsyncSession, product_id: str, quantity: int) -> None:
    """
    Descuenta unidades del stock sin bajar de cero.
    El commit se gestiona en la operación que llama a esta función.
    """
    db_product = await get_product(db, product_id)
    if not db_product:
        logger.warning(f"No se puede descontar stock: producto {product_id} no existe")
        return
    db_product.quantity = max(0, (db_product.quantity or 0) - quantity)
