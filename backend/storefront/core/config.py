# backend/storefront/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la tienda usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Pop and Fun API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos (catálogo y pedidos)
    POSTGRES_SERVER: str = "postgres"
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "popandfun_db"
    POSTGRES_PORT: str = "5432"

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Configuración de Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # Carrito: "redis" en producción, "memory" para desarrollo local
    CART_STORAGE_BACKEND: str = "redis"
    CART_STORAGE_KEY: str = "popandfun-cart"

    # Checkout
    STORE_NAME: str = "Pop and Fun"
    ORDER_ID_PREFIX: str = "PF"
    CURRENCY: str = "INR"
    CURRENCY_SYMBOL: str = "₹"
    SUMMARY_SEPARATOR: str = "%0A"

    # Razorpay - Solo en el servidor, nunca en el cliente
    RAZORPAY_KEY_ID: Optional[str] = None
    RAZORPAY_KEY_SECRET: Optional[str] = None
    RAZORPAY_API_URL: str = "https://api.razorpay.com/v1"
    PAYMENT_LINK_TIMEOUT: float = 30.0

    # WhatsApp
    WHATSAPP_NUMBER: str = "918639122823"
    WHATSAPP_BASE_URL: str = "https://wa.me"

    # Admin Token - Opcional; sin él las rutas de administración quedan cerradas
    ADMIN_TOKEN: Optional[str] = None

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
