# backend/storefront/services/cart_service.py
"""
Servicio de Carrito de Compras para la tienda.

Este servicio gestiona las líneas del carrito de una sesión: fusiona
selecciones repetidas del mismo producto y variante, limita las cantidades
al stock disponible y calcula los totales. Tras cada cambio guarda el
carrito completo en la ranura clave-valor configurada.
"""
import logging
from typing import List, Optional

from pydantic import ValidationError

from storefront.core.exceptions import InvalidVariant, OutOfStock, PersistenceWriteFailed
from storefront.schemas.cart_schema import CartLine, CartState
from storefront.schemas.product_schema import CatalogItem

logger = logging.getLogger(__name__)


class CartAggregator:
    """
    Carrito de una sesión.

    Invariantes:
    - nunca hay dos líneas con la misma clave (id, variante);
    - toda línea tiene `requested_quantity` > 0 y <= su `quantity`, el stock
      del catálogo visto en el último add_item.
    """

    def __init__(self, storage, storage_key: str):
        self.storage = storage
        self.storage_key = storage_key
        self.persisted = True
        self._lines: List[CartLine] = self._load()

    # ========================================
    # PERSISTENCIA
    # ========================================

    def _load(self) -> List[CartLine]:
        raw = self.storage.get(self.storage_key)
        if not raw:
            return []
        try:
            return CartState.model_validate_json(raw).lines
        except ValidationError:
            logger.error(f"Carrito corrupto en '{self.storage_key}', se empieza vacío")
            return []

    def save(self) -> bool:
        """
        Escribe el carrito completo. Un fallo se registra pero no se propaga:
        el estado en memoria sigue siendo el válido para la sesión.
        """
        try:
            self.storage.set(self.storage_key, self.state.model_dump_json())
            self.persisted = True
        except PersistenceWriteFailed as e:
            logger.warning(f"No se pudo guardar el carrito '{self.storage_key}': {e}")
            self.persisted = False
        return self.persisted

    # ========================================
    # LECTURA
    # ========================================

    @property
    def lines(self) -> List[CartLine]:
        return [line.model_copy() for line in self._lines]

    @property
    def state(self) -> CartState:
        return CartState(lines=self.lines)

    def _find(self, item_id: str, variant: Optional[str]) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.identity_key == (item_id, variant):
                return index
        return None

    def total_items(self) -> int:
        return sum(line.requested_quantity for line in self._lines)

    def total_price(self) -> float:
        # Precio guardado al añadir, no el del catálogo actual
        return sum(line.line_total for line in self._lines)

    # ========================================
    # MUTACIONES
    # ========================================

    def add_item(self, catalog_item: CatalogItem, variant: Optional[str] = None) -> None:
        """
        Añade una unidad del producto. Si la línea ya existe suma uno sin pasar
        del stock actual del catálogo, que pasa a ser el límite de la línea.
        El precio de la línea sigue siendo el guardado al añadirla.

        Raises:
            InvalidVariant: la variante no es una de las del producto.
            OutOfStock: el producto no tiene unidades disponibles.
        """
        if variant is not None and not (catalog_item.has_variants and variant in catalog_item.color_variants):
            raise InvalidVariant(catalog_item.id, variant)

        index = self._find(catalog_item.id, variant)
        if index is not None:
            line = self._lines[index]
            stock = catalog_item.quantity
            if stock <= 0:
                raise OutOfStock(catalog_item.id)
            requested = min(line.requested_quantity + 1, stock)
            if requested == line.requested_quantity and stock == line.quantity:
                return
            self._lines[index] = line.model_copy(
                update={"requested_quantity": requested, "quantity": stock}
            )
        else:
            if catalog_item.quantity <= 0:
                raise OutOfStock(catalog_item.id)
            self._lines.append(
                CartLine(
                    **catalog_item.model_dump(),
                    selected_variant=variant,
                    requested_quantity=1,
                )
            )
        self.save()

    def set_quantity(self, item_id: str, variant: Optional[str], new_quantity: int) -> None:
        """Fija la cantidad de una línea. Cero o menos la elimina."""
        if new_quantity <= 0:
            self.remove_item(item_id, variant)
            return

        index = self._find(item_id, variant)
        if index is None:
            return

        line = self._lines[index]
        clamped = min(new_quantity, line.quantity)
        if clamped <= 0:
            # El stock guardado es 0: la línea no puede seguir existiendo
            del self._lines[index]
        elif clamped == line.requested_quantity:
            return
        else:
            self._lines[index] = line.model_copy(update={"requested_quantity": clamped})
        self.save()

    def remove_item(self, item_id: str, variant: Optional[str] = None) -> None:
        index = self._find(item_id, variant)
        if index is None:
            return
        del self._lines[index]
        self.save()

    def clear(self) -> None:
        """Vacía completamente el carrito."""
        self._lines = []
        self.save()
