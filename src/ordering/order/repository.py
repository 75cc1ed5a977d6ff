"""Order store port and the in-memory adapter.

The persistent record store is an external collaborator; the storefront only
relies on the async operations below. Reads hand back copies, so callers
never mutate stored records by accident.
"""

from abc import ABC, abstractmethod

from ordering.order.order import Order, OrderNotFound, OrderStatus


class OrderStore(ABC):
    """Abstract interface for the persistent order collection."""

    @abstractmethod
    async def add(self, order: Order) -> None: ...

    @abstractmethod
    async def get(self, order_id: str) -> Order:
        """Return the order or raise OrderNotFound."""
        ...

    @abstractmethod
    async def update_status(self, order_id: str, status: OrderStatus) -> Order: ...

    @abstractmethod
    async def find_page(
        self,
        search: str | None,
        status: OrderStatus | None,
        offset: int,
        limit: int,
    ) -> tuple[list[Order], int]:
        """Return one newest-first page of orders with their line items, and the filtered total.

        ``search`` matches customer name or phone case-insensitively; a None
        ``status`` matches every status.
        """
        ...

    @abstractmethod
    async def count(self, status: OrderStatus | None = None) -> int:
        """Count orders with the given status, or all orders when status is None."""
        ...


class InMemoryOrderStore(OrderStore):
    def __init__(self):
        self._orders: dict[str, Order] = {}

    async def add(self, order: Order) -> None:
        self._orders[order.order_id] = order.model_copy(deep=True)

    async def get(self, order_id: str) -> Order:
        try:
            return self._orders[order_id].model_copy(deep=True)
        except KeyError:
            raise OrderNotFound(order_id) from None

    async def update_status(self, order_id: str, status: OrderStatus) -> Order:
        order = await self.get(order_id)
        order.change_status(status)
        self._orders[order_id] = order
        return order.model_copy(deep=True)

    async def find_page(self, search, status, offset, limit):
        matches = [order for order in self._orders.values() if _matches(order, search, status)]
        # Insertion order breaks created_at ties, newest first
        matches = list(reversed(matches))
        matches.sort(key=lambda order: order.created_at, reverse=True)
        page = matches[offset : offset + limit]
        return [order.model_copy(deep=True) for order in page], len(matches)

    async def count(self, status=None):
        return sum(1 for order in self._orders.values() if status is None or order.status == status)

    def reset(self) -> None:
        self._orders.clear()


def _matches(order: Order, search: str | None, status: OrderStatus | None) -> bool:
    if status is not None and order.status != status:
        return False
    if search:
        needle = search.casefold()
        return needle in order.customer_name.casefold() or needle in order.customer_phone.casefold()
    return True


_store_instance: OrderStore | None = None


def get_order_store() -> OrderStore:
    """Return the configured order store. Defaults to the in-memory store."""
    global _store_instance
    if _store_instance is None:
        _store_instance = InMemoryOrderStore()
    return _store_instance


def set_order_store(store: OrderStore) -> None:
    """Override the active order store (useful for tests)."""
    global _store_instance
    _store_instance = store


def reset_order_store() -> None:
    global _store_instance
    _store_instance = None
