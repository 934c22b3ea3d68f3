# backend/storefront/api/v1/endpoints/cart.py
"""
Este archivo contiene los endpoints para el carrito de compras.

Cada navegador identifica su carrito con un `session_id`. Se encarga de
añadir productos, cambiar cantidades, eliminar líneas, vaciar el carrito y
lanzar el checkout.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from storefront.api import deps
from storefront.core.config import Settings
from storefront.core.exceptions import (
    EmptyCart,
    ExternalServiceFailed,
    InvalidVariant,
    MissingCustomerName,
    OutOfStock,
)
from storefront.crud import order_crud, product_crud
from storefront.schemas.cart_schema import Cart, CartItemCreate, CartQuantityUpdate
from storefront.schemas.order_schema import CheckoutPayload, CheckoutRequest, CheckoutResponse, OrderCreate
from storefront.services.cart_service import CartAggregator
from storefront.services.cart_storage import cart_storage_key
from storefront.services.checkout_service import CheckoutFlow
from storefront.services.payment_link_service import PaymentLinkService

logger = logging.getLogger(__name__)

# Router para el carrito de compras
router = APIRouter()


# El almacenamiento es síncrono (Redis): las rutas async lo llaman desde el threadpool
def _get_cart(session_id: str, storage, settings: Settings) -> CartAggregator:
    return CartAggregator(storage, cart_storage_key(settings, session_id))


def _cart_response(cart: CartAggregator) -> Cart:
    return Cart(
        lines=cart.lines,
        total_items=cart.total_items(),
        total_price=cart.total_price(),
        persisted=cart.persisted,
    )


@router.get("/{session_id}", response_model=Cart)
def get_cart(
    session_id: str,
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Obtiene el contenido del carrito de una sesión.
    """
    return _cart_response(_get_cart(session_id, storage, settings))


@router.post("/{session_id}/items", status_code=status.HTTP_201_CREATED, response_model=Cart)
async def add_item_to_cart(
    session_id: str,
    item: CartItemCreate,
    db: AsyncSession = Depends(deps.get_db),
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Añade una unidad de un producto (y variante) al carrito.
    Si la línea ya existe suma uno, sin superar el stock disponible.
    """
    catalog_item = await product_crud.get_catalog_item(db, item.product_id)
    if not catalog_item:
        raise HTTPException(status_code=404, detail="Product not found")

    cart = await run_in_threadpool(_get_cart, session_id, storage, settings)
    try:
        await run_in_threadpool(cart.add_item, catalog_item, item.variant)
    except OutOfStock as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except InvalidVariant as e:
        raise HTTPException(status_code=422, detail=e.message)

    return _cart_response(cart)


@router.put("/{session_id}/items/{product_id}", response_model=Cart)
def update_item_quantity(
    session_id: str,
    product_id: str,
    update: CartQuantityUpdate,
    variant: Optional[str] = None,
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Fija la cantidad de una línea. Cero o menos la elimina; por encima del
    stock se limita al stock.
    """
    cart = _get_cart(session_id, storage, settings)
    cart.set_quantity(product_id, variant, update.quantity)
    return _cart_response(cart)


@router.delete("/{session_id}/items/{product_id}", response_model=Cart)
def remove_item_from_cart(
    session_id: str,
    product_id: str,
    variant: Optional[str] = None,
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Elimina una línea del carrito. Si no existe no hace nada.
    """
    cart = _get_cart(session_id, storage, settings)
    cart.remove_item(product_id, variant)
    return _cart_response(cart)


@router.delete("/{session_id}", status_code=204)
def clear_cart(
    session_id: str,
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Vacía completamente el carrito de una sesión.
    """
    _get_cart(session_id, storage, settings).clear()
    return


@router.post("/{session_id}/checkout", response_model=CheckoutResponse)
async def checkout(
    session_id: str,
    request: CheckoutRequest,
    db: AsyncSession = Depends(deps.get_db),
    storage=Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
    payment_link_service: PaymentLinkService = Depends(deps.get_payment_link_service),
):
    """
    Procesa el checkout:
    1. Construye el payload del pedido a partir del carrito.
    2. Pide el enlace de pago a Razorpay.
    3. Registra el pedido como pendiente.
    4. Vacía el carrito y devuelve el enlace de WhatsApp con el pedido.
    Si algo falla antes del paso 4, el carrito queda intacto.
    """
    cart = await run_in_threadpool(_get_cart, session_id, storage, settings)

    async def record_order(payload: CheckoutPayload, payment_link: str) -> None:
        await order_crud.create_order(db, OrderCreate(
            order_id=payload.order_id,
            customer_name=payload.customer_name,
            total_amount=payload.total_amount,
            items=payload.item_manifest,
            payment_link=payment_link,
        ))

    flow = CheckoutFlow(cart, payment_link_service, settings=settings, order_recorder=record_order)
    try:
        result = await flow.run(request.customer_name)
    except (EmptyCart, MissingCustomerName) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ExternalServiceFailed as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return CheckoutResponse(
        order_id=result.payload.order_id,
        customer_name=result.payload.customer_name,
        total_amount=result.payload.total_amount,
        payment_link=result.payment_link,
        whatsapp_url=result.whatsapp_url,
    )
