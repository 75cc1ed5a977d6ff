"""Observers that keep a derived view of the cart in step with the store.

A view re-reads the store on every change signal and recomputes its figures
from scratch, so redundant signals leave it unchanged.
"""

from cart.item import CartItem
from cart.store import CartStore
from cart.totals import cart_item_count, cart_total
from shared.money import format_vnd


class CartSummaryView:
    """Item count and total shown by the header badge, cart drawer and checkout summary."""

    def __init__(self, store: CartStore):
        self.store = store
        self.items: list[CartItem] = []
        self.item_count = 0
        self.total = 0
        self.refresh_count = 0
        self.refresh()
        self._subscription = store.bus.subscribe(self.refresh)

    @property
    def formatted_total(self) -> str:
        return format_vnd(self.total)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def attached(self) -> bool:
        return self._subscription.active

    def refresh(self) -> None:
        self.items = self.store.read()
        self.item_count = cart_item_count(self.items)
        self.total = cart_total(self.items)
        self.refresh_count += 1

    def close(self) -> None:
        self._subscription.unsubscribe()
