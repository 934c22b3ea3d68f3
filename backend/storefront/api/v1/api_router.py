# backend/storefront/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from storefront.api.v1.endpoints import (
    products,
    categories,
    cart,
    orders,
    payments
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

@api_router_v1.get("/health", tags=["Root"])
async def health():
    """Health check del backend de la tienda."""
    return {"status": "OK", "message": "Payment API server is running"}

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE CATEGORÍAS
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)

# ROUTER DE PRODUCTOS
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DEL CARRITO
# Maneja las operaciones del carrito de compras y el checkout
api_router_v1.include_router(
    cart.router,
    prefix="/cart",
    tags=["Cart"]
)

# ROUTER DE PAGOS
api_router_v1.include_router(
    payments.router,
    prefix="/payments",
    tags=["Payments"]
)

# ROUTER DE PEDIDOS (solo administración)
api_router_v1.include_router(
    orders.router,
    prefix="/orders",
    tags=["Orders"]
)
