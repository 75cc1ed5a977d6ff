"""Pure derivations over a cart snapshot. Integer arithmetic only."""

from collections.abc import Iterable

from cart.item import CartItem


def cart_total(items: Iterable[CartItem]) -> int:
    return sum(item.price * item.quantity for item in items)


def cart_item_count(items: Iterable[CartItem]) -> int:
    return sum(item.quantity for item in items)
