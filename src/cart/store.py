"""Persistent cart store — the only writer of the visitor's cart.

Every mutation reads the stored cart, applies the change, persists the whole
list again and fires exactly one change signal, whether or not anything
actually changed. Requested quantities outside ``[1, stock]`` are clamped
without telling the caller; the clamp is only logged.
"""

import structlog

from cart.item import CartItem, dump_cart, load_cart
from cart.signals import ChangeBus
from cart.storage import CartStorage

logger = structlog.get_logger(__name__)

CART_KEY = "telectric_cart"


class CartStore:
    def __init__(self, storage: CartStorage, bus: ChangeBus | None = None, key: str = CART_KEY):
        self.storage = storage
        self.bus = bus if bus is not None else ChangeBus()
        self.key = key

    # -------------------------------------------------------------------
    # Read / write
    # -------------------------------------------------------------------
    def read(self) -> list[CartItem]:
        """Return the stored cart, or an empty cart when storage is missing or corrupt."""
        try:
            raw = self.storage.get(self.key)
        except (OSError, ValueError) as exc:
            logger.warning("Cart storage unreadable, starting empty", key=self.key, error=str(exc))
            return []

        if not raw:
            return []

        try:
            return load_cart(raw)
        except ValueError as exc:
            logger.warning("Discarding corrupt cart", key=self.key, error=str(exc))
            return []

    def write(self, items: list[CartItem]) -> None:
        self.storage.set(self.key, dump_cart(items))
        self.bus.emit()

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, item: CartItem) -> list[CartItem]:
        """Add a variant, or merge its quantity into the existing line (capped at stock)."""
        items = self.read()
        existing = next((i for i in items if i.variant_id == item.variant_id), None)

        if existing:
            requested = existing.quantity + item.quantity
            existing.stock = item.stock
            existing.quantity = _clamp(requested, item.stock, variant_id=item.variant_id)
        else:
            items.append(item.model_copy(deep=True))

        self.write(items)
        return items

    def set_quantity(self, variant_id: str, quantity: int) -> list[CartItem]:
        """Set a line's quantity within ``[1, stock]``; unknown variants are left alone."""
        items = self.read()
        item = next((i for i in items if i.variant_id == variant_id), None)
        if item:
            item.quantity = _clamp(quantity, item.stock, variant_id=variant_id)

        self.write(items)
        return items

    def remove(self, variant_id: str) -> list[CartItem]:
        items = [i for i in self.read() if i.variant_id != variant_id]
        self.write(items)
        return items

    def clear(self) -> None:
        self.write([])


def _clamp(requested: int, stock: int, variant_id: str) -> int:
    applied = max(1, min(requested, stock))
    if applied != requested:
        logger.info(
            "cart.quantity_clamped",
            variant_id=variant_id,
            requested=requested,
            applied=applied,
            stock=stock,
        )
    return applied
