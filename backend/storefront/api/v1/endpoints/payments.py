# backend/storefront/api/v1/endpoints/payments.py
"""
Endpoint de creación directa de enlaces de pago.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.api import deps
from storefront.core.exceptions import ExternalServiceFailed
from storefront.schemas.order_schema import PaymentLinkRequest, PaymentLinkResponse
from storefront.services.payment_link_service import PaymentLinkService

router = APIRouter()


@router.post("/payment-link", response_model=PaymentLinkResponse)
async def create_payment_link(
    request: PaymentLinkRequest,
    payment_link_service: PaymentLinkService = Depends(deps.get_payment_link_service),
):
    """Crea un enlace de pago para un pedido ya construido."""
    if not request.amount or not request.customer_name or not request.order_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    try:
        link = await payment_link_service.create_payment_link(
            amount=request.amount,
            customer_name=request.customer_name,
            order_id=request.order_id,
            items=request.items,
        )
    except ExternalServiceFailed as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return PaymentLinkResponse(payment_link=link, order_id=request.order_id)
