# backend/storefront/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura la aplicación de la tienda: registro de routers con su
prefijo de versión, documentación automática y configuración del logging al
arrancar.
"""

import logging

from fastapi import FastAPI
from storefront.core.config import settings  # Configuración centralizada de la aplicación
from storefront.api.v1.api_router import api_router_v1  # Router principal de la API v1

logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API de la tienda Pop and Fun: catálogo, carrito y checkout"
)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)


@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.

    Returns:
        dict: Mensaje de bienvenida con información del proyecto

    Example:
        GET /
        Response: {"message": "Bienvenido a Pop and Fun API v0.1.0"}
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    """
    Configura el logging con LOG_LEVEL y LOG_FORMAT y avisa de la
    configuración que falta para poder cobrar.
    """
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)

    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        logger.warning("Credenciales de Razorpay no configuradas: el checkout fallará")
    if not settings.ADMIN_TOKEN:
        logger.warning("ADMIN_TOKEN no configurado: las rutas de administración están cerradas")
    logger.info(f"{settings.PROJECT_NAME} arrancado (carrito en '{settings.CART_STORAGE_BACKEND}')")
