# backend/storefront/crud/order_crud.py
"""
Operaciones CRUD para el modelo Order.

Un pedido se registra como pendiente cuando el servicio de pago devuelve el
enlace, y el administrador lo marca como entregado, momento en el que se
descuenta el stock de cada producto.
"""

import logging
import time
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models.order_model import Order
from storefront.schemas.order_schema import OrderCreate, OrderStatus
from storefront.crud import product_crud

logger = logging.getLogger(__name__)


async def create_order(db: AsyncSession, order: OrderCreate) -> Order:
    """Registra un nuevo pedido de forma asíncrona."""
    db_order = Order(
        order_id=order.order_id,
        customer_name=order.customer_name,
        items=[item.model_dump() for item in order.items],
        total_amount=order.total_amount,
        payment_link=order.payment_link,
        status=order.status.value,
        created_at=int(time.time() * 1000),
    )
    db.add(db_order)
    await db.commit()
    await db.refresh(db_order)
    return db_order


async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
    """Obtiene un pedido por su id."""
    result = await db.execute(select(Order).filter(Order.order_id == order_id))
    return result.scalars().first()


async def get_orders(db: AsyncSession, status: Optional[OrderStatus] = None, skip: int = 0, limit: int = 100) -> List[Order]:
    """Pedidos, los más recientes primero, opcionalmente filtrados por estado."""
    query = select(Order)
    if status is not None:
        query = query.filter(Order.status == status.value)
    query = query.order_by(Order.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def mark_delivered(db: AsyncSession, order_id: str) -> Optional[Order]:
    """
    Marca un pedido como entregado y descuenta del stock las cantidades pedidas.
    Un pedido ya entregado no vuelve a descontar stock.
    """
    db_order = await get_order(db, order_id)
    if not db_order:
        return None
    if db_order.status == OrderStatus.DELIVERED.value:
        return db_order

    for item in db_order.items or []:
        await product_crud.deduct_quantity(db, item["id"], item["quantity"])

    db_order.status = OrderStatus.DELIVERED.value
    await db.commit()
    await db.refresh(db_order)
    logger.info(f"Pedido {order_id} entregado")
    return db_order


async def delete_order(db: AsyncSession, order_id: str) -> Optional[Order]:
    db_order = await get_order(db, order_id)
    if not db_order:
        return None
    await db.delete(db_order)
    await db.commit()
    return db_order
