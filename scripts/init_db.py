# popandfun/scripts/init_db.py

"""
Script de Inicialización de la Base de Datos

Crea las tablas del catálogo y de pedidos (products, categories, orders) en
PostgreSQL si todavía no existen. Opcionalmente (--seed) añade unas
categorías de ejemplo para empezar a cargar productos desde el panel.

Requisitos Previos:
-   Un archivo `.env` configurado.
-   Contenedor de PostgreSQL en ejecución.
"""
import argparse
import asyncio
import logging
import os
import sys

# Añadir el directorio backend/ al PYTHONPATH
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend"))
sys.path.insert(0, project_root)

from storefront.db.database import Base, engine, AsyncSessionLocal
from storefront.db.models import category_model, order_model, product_model  # noqa: F401 (registra los modelos)
from storefront.crud import category_crud
from storefront.schemas.category_schema import CategoryCreate

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

SEED_CATEGORIES = ["Toys", "Games", "Party Supplies"]


async def seed_categories() -> None:
    async with AsyncSessionLocal() as db:
        for name in SEED_CATEGORIES:
            if await category_crud.get_category_by_name(db, name):
                continue
            await category_crud.create_category(db, CategoryCreate(name=name))
            logging.info(f"Categoría creada: {name}")


async def main(seed: bool) -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logging.info("Tablas creadas (o ya existentes).")

        if seed:
            await seed_categories()
    except Exception as e:
        logging.critical(f"Error inicializando la base de datos: {e}", exc_info=True)
        raise
    finally:
        await engine.dispose()
        logging.info("--- Inicialización finalizada ---")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Crea las tablas de la tienda")
    parser.add_argument("--seed", action="store_true", help="Añade categorías de ejemplo")
    args = parser.parse_args()
    asyncio.run(main(args.seed))
