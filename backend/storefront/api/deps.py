# backend/storefront/api/deps.py
"""
Módulo de dependencias para FastAPI.

Centraliza lo que se inyecta en los endpoints: sesión de base de datos,
configuración, almacenamiento del carrito, servicio de pago y la
comprobación del token de administración. En los tests se sustituyen con
`app.dependency_overrides`.
"""

from typing import AsyncGenerator, Optional
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.database import AsyncSessionLocal
from storefront.core.config import Settings, settings
from storefront.services.cart_storage import get_cart_storage
from storefront.services.payment_link_service import PaymentLinkService

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session

def get_settings() -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings

def get_storage(settings: Settings = Depends(get_settings)):
    """Ranura clave-valor de los carritos."""
    return get_cart_storage(settings)

def get_payment_link_service(settings: Settings = Depends(get_settings)) -> PaymentLinkService:
    return PaymentLinkService(settings)

def require_admin(
    x_admin_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Cierra las rutas de administración a quien no envíe el ADMIN_TOKEN."""
    if not settings.ADMIN_TOKEN:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Admin access is not configured")
    if x_admin_token != settings.ADMIN_TOKEN:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin token")
