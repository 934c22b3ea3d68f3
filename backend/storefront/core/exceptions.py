# backend/storefront/core/exceptions.py
"""
Errores de dominio de la tienda.

Cada error lleva un mensaje pensado para mostrarse al usuario. Los endpoints
los traducen a HTTPException; ninguno deja el carrito en un estado inconsistente.
"""


class StorefrontError(Exception):
    """Error base de la tienda."""
    message = "Something went wrong. Please try again."

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class OutOfStock(StorefrontError):
    """El producto no tiene unidades disponibles."""
    message = "This product is out of stock"

    def __init__(self, product_id: str, message: str = None):
        self.product_id = product_id
        super().__init__(message)


class InvalidVariant(StorefrontError):
    """La variante elegida no existe para el producto."""
    message = "Please select a valid color"

    def __init__(self, product_id: str, variant, message: str = None):
        self.product_id = product_id
        self.variant = variant
        super().__init__(message)


class ProductNotFound(StorefrontError):
    message = "Product not found"


class EmptyCart(StorefrontError):
    message = "Your cart is empty"


class MissingCustomerName(StorefrontError):
    message = "Please enter your name"


class PersistenceWriteFailed(StorefrontError):
    """No se pudo guardar el carrito. No es fatal: el estado en memoria manda."""
    message = "Your cart could not be saved"


class ExternalServiceFailed(StorefrontError):
    """Fallo opaco del servicio de enlaces de pago."""
    message = "Failed to create payment link. Please try again."

    def __init__(self, message: str = None, details: str = None, status_code: int = None):
        self.details = details
        self.status_code = status_code
        super().__init__(message)
