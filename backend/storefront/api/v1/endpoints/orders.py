# backend/storefront/api/v1/endpoints/orders.py
"""
Endpoints de administración de pedidos: listar, marcar como entregado y borrar.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from storefront.api import deps
from storefront.crud import order_crud
from storefront.schemas.order_schema import OrderResponse, OrderStatus

router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.get("/", response_model=List[OrderResponse])
async def read_orders(
    db: AsyncSession = Depends(deps.get_db),
    order_status: Optional[OrderStatus] = Query(OrderStatus.PENDING, alias="status"),
    skip: int = 0,
    limit: int = 100,
):
    """Lista los pedidos; por defecto solo los pendientes."""
    orders = await order_crud.get_orders(db, status=order_status, skip=skip, limit=limit)
    return [OrderResponse.model_validate(o.to_dict()) for o in orders]


@router.post("/{order_id}/deliver", response_model=OrderResponse)
async def deliver_order(order_id: str, db: AsyncSession = Depends(deps.get_db)):
    """Marca el pedido como entregado y descuenta el stock."""
    order = await order_crud.mark_delivered(db, order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return OrderResponse.model_validate(order.to_dict())


@router.delete("/{order_id}", response_model=OrderResponse)
async def delete_order(order_id: str, db: AsyncSession = Depends(deps.get_db)):
    order = await order_crud.delete_order(db, order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return OrderResponse.model_validate(order.to_dict())
