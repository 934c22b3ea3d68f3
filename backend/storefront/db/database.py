# backend/storefront/db/database.py

"""
Conexión a PostgreSQL para el catálogo, las categorías y los pedidos.

El carrito no pasa por aquí: vive en la ranura clave-valor de
services/cart_storage.py. Las rutas reciben la sesión con deps.get_db y
scripts/init_db.py crea las tablas a partir de `Base.metadata`.
"""

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from storefront.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, pool_pre_ping=True)

# Los CRUD devuelven los modelos tras el commit y las rutas los serializan
# con to_dict(); sin expire_on_commit no hace falta recargarlos.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Product, Category y Order heredan de aquí
Base = declarative_base()
