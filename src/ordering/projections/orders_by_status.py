"""Orders by status — admin listing with filtering, pagination and per-status counts.

One filtered page query and six count-only queries (one per status plus the
grand total) run concurrently and are joined before the listing is returned.
The counts are never narrowed by the search or status filter, so the dashboard
summary stays put while an administrator types a search term.

Any failing query fails the whole listing; partial statistics are never shown.
"""

import asyncio
from dataclasses import dataclass, field

import structlog

from ordering.order.order import Order, OrderStatus
from ordering.order.repository import OrderStore

logger = structlog.get_logger(__name__)

PAGE_SIZE = 10
ALL_STATUSES = "all"


class AggregationError(Exception):
    """The order listing could not be assembled."""


@dataclass(frozen=True)
class OrderFilter:
    search: str | None = ""
    status: str = ALL_STATUSES
    page: int = 1

    def __post_init__(self):
        if self.status != ALL_STATUSES:
            # Raises ValueError for an unknown status
            OrderStatus(self.status)

    @property
    def status_filter(self) -> OrderStatus | None:
        return None if self.status == ALL_STATUSES else OrderStatus(self.status)

    @property
    def page_number(self) -> int:
        return max(1, self.page)

    def offset(self, page_size: int) -> int:
        return (self.page_number - 1) * page_size


@dataclass(frozen=True)
class OrderListing:
    rows: list[Order]
    total_count: int
    status_counts: dict[str, int] = field(default_factory=dict)
    page: int = 1
    page_size: int = PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return max(1, -(-self.total_count // self.page_size))


class OrdersByStatus:
    def __init__(self, store: OrderStore, page_size: int = PAGE_SIZE, timeout: float | None = None):
        self.store = store
        self.page_size = page_size
        self.timeout = timeout

    async def _bounded(self, coro):
        return await asyncio.wait_for(coro, timeout=self.timeout)

    async def list(self, order_filter: OrderFilter) -> OrderListing:
        search = (order_filter.search or "").strip() or None

        try:
            async with asyncio.TaskGroup() as tg:
                page_task = tg.create_task(
                    self._bounded(
                        self.store.find_page(
                            search=search,
                            status=order_filter.status_filter,
                            offset=order_filter.offset(self.page_size),
                            limit=self.page_size,
                        )
                    )
                )
                count_tasks = {
                    status.value: tg.create_task(self._bounded(self.store.count(status=status)))
                    for status in OrderStatus
                }
                grand_total_task = tg.create_task(self._bounded(self.store.count()))
        except Exception as exc:
            first = exc.exceptions[0] if isinstance(exc, ExceptionGroup) else exc
            message = str(first) or type(first).__name__
            logger.error(
                "Order listing failed",
                search=search,
                status=order_filter.status,
                page=order_filter.page_number,
                error=message,
            )
            raise AggregationError(f"Could not load orders: {message}") from first

        rows, filtered_total = page_task.result()
        status_counts = {status: task.result() for status, task in count_tasks.items()}
        status_counts["total"] = grand_total_task.result()

        return OrderListing(
            rows=rows,
            total_count=filtered_total,
            status_counts=status_counts,
            page=order_filter.page_number,
            page_size=self.page_size,
        )
