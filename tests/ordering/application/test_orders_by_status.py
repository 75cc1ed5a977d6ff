"""Tests for the admin order listing: filtering, pagination and per-status counts."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.order import Order, OrderStatus
from ordering.order.repository import InMemoryOrderStore
from ordering.projections.orders_by_status import (
    PAGE_SIZE,
    AggregationError,
    OrderFilter,
    OrderListing,
    OrdersByStatus,
)

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def _order(name, phone="0900000000", minutes=0):
    order = Order.create(
        customer_name=name,
        customer_phone=phone,
        shipping_address="12 Lê Lợi",
        items=[{"product_name": "Bóng đèn", "quantity": 1, "price": 45_000}],
    )
    stamp = BASE_TIME + timedelta(minutes=minutes)
    return order.model_copy(update={"created_at": stamp, "updated_at": stamp})


def _seed(store, orders, statuses=None):
    async def _run():
        for order in orders:
            await store.add(order)
        for order_id, status in (statuses or {}).items():
            await store.update_status(order_id, status)

    asyncio.run(_run())


def _list(store, **filter_args):
    return asyncio.run(OrdersByStatus(store).list(OrderFilter(**filter_args)))


class TestOrderFilter:
    def test_defaults(self):
        order_filter = OrderFilter()
        assert order_filter.status_filter is None
        assert order_filter.page_number == 1
        assert order_filter.offset(PAGE_SIZE) == 0

    def test_status_filter(self):
        assert OrderFilter(status="shipped").status_filter == OrderStatus.SHIPPED

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValueError):
            OrderFilter(status="returned")

    def test_page_below_one_is_first_page(self):
        assert OrderFilter(page=0).page_number == 1
        assert OrderFilter(page=-3).offset(10) == 0

    def test_offset(self):
        assert OrderFilter(page=3).offset(10) == 20


class TestOrderListing:
    def test_total_pages_rounds_up(self):
        assert OrderListing(rows=[], total_count=21, page_size=10).total_pages == 3

    def test_empty_listing_has_one_page(self):
        assert OrderListing(rows=[], total_count=0).total_pages == 1


class TestPagination:
    def setup_method(self):
        self.store = InMemoryOrderStore()
        _seed(self.store, [_order(f"Khách {i:02d}", minutes=i) for i in range(25)])

    def test_first_page_is_newest_ten(self):
        listing = _list(self.store)
        assert len(listing.rows) == 10
        assert listing.rows[0].customer_name == "Khách 24"
        assert listing.rows[-1].customer_name == "Khách 15"
        assert listing.total_count == 25
        assert listing.total_pages == 3

    def test_last_page_is_partial(self):
        listing = _list(self.store, page=3)
        assert [row.customer_name for row in listing.rows] == [f"Khách {i:02d}" for i in range(4, -1, -1)]
        assert listing.page == 3

    def test_page_past_the_end_is_empty(self):
        listing = _list(self.store, page=9)
        assert listing.rows == []
        assert listing.total_count == 25


class TestFiltering:
    def setup_method(self):
        self.store = InMemoryOrderStore()
        self.lan = _order("Trần Thị Lan", phone="0911111111", minutes=1)
        self.long = _order("Hoàng Long", phone="0922222222", minutes=2)
        self.lanh = _order("Lanh Nguyễn", phone="0933333333", minutes=3)
        _seed(
            self.store,
            [self.lan, self.long, self.lanh],
            statuses={self.lan.order_id: OrderStatus.DELIVERED, self.long.order_id: OrderStatus.CANCELLED},
        )

    def test_search_by_name(self):
        listing = _list(self.store, search="lan")
        assert [row.customer_name for row in listing.rows] == ["Lanh Nguyễn", "Trần Thị Lan"]
        assert listing.total_count == 2

    def test_search_by_phone(self):
        listing = _list(self.store, search="0922")
        assert [row.order_id for row in listing.rows] == [self.long.order_id]

    def test_search_is_trimmed(self):
        assert _list(self.store, search="  0922  ").total_count == 1

    def test_whitespace_search_matches_everything(self):
        assert _list(self.store, search="   ").total_count == 3

    def test_missing_search_matches_everything(self):
        listing = _list(self.store, search=None, status="pending")
        assert [row.order_id for row in listing.rows] == [self.lanh.order_id]
        assert listing.status_counts["total"] == 3

    def test_status_filter(self):
        listing = _list(self.store, status="delivered")
        assert [row.order_id for row in listing.rows] == [self.lan.order_id]

    def test_search_and_status_combine(self):
        assert _list(self.store, search="lan", status="pending").total_count == 1

    def test_rows_carry_line_items(self):
        listing = _list(self.store)
        assert all(row.items for row in listing.rows)


class TestStatusCounts:
    def setup_method(self):
        self.store = InMemoryOrderStore()
        orders = [_order(f"C{i}", minutes=i) for i in range(6)]
        _seed(
            self.store,
            orders,
            statuses={
                orders[0].order_id: OrderStatus.PROCESSING,
                orders[1].order_id: OrderStatus.PROCESSING,
                orders[2].order_id: OrderStatus.SHIPPED,
                orders[3].order_id: OrderStatus.CANCELLED,
            },
        )

    def test_counts_per_status_and_total(self):
        assert _list(self.store).status_counts == {
            "pending": 2,
            "processing": 2,
            "shipped": 1,
            "delivered": 0,
            "cancelled": 1,
            "total": 6,
        }

    def test_counts_ignore_search_and_status_filter(self):
        unfiltered = _list(self.store).status_counts
        assert _list(self.store, search="C5").status_counts == unfiltered
        assert _list(self.store, status="shipped").status_counts == unfiltered
        assert _list(self.store, search="nobody", status="delivered").status_counts == unfiltered

    def test_empty_store(self):
        listing = _list(InMemoryOrderStore())
        assert listing.rows == []
        assert listing.total_count == 0
        assert set(listing.status_counts.values()) == {0}


class FailingCountStore(InMemoryOrderStore):
    async def count(self, status=None):
        if status == OrderStatus.SHIPPED:
            raise ConnectionError("count query failed")
        return await super().count(status)


class FailingPageStore(InMemoryOrderStore):
    async def find_page(self, search, status, offset, limit):
        raise ConnectionError("page query failed")


class SlowStore(InMemoryOrderStore):
    async def count(self, status=None):
        await asyncio.sleep(10)
        return 0


class TrackingStore(InMemoryOrderStore):
    def __init__(self):
        super().__init__()
        self.in_flight = 0
        self.peak = 0

    async def _track(self):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1

    async def find_page(self, search, status, offset, limit):
        await self._track()
        return await super().find_page(search, status, offset, limit)

    async def count(self, status=None):
        await self._track()
        return await super().count(status)


class TestFailures:
    def test_failed_count_fails_whole_listing(self):
        with pytest.raises(AggregationError, match="count query failed"):
            _list(FailingCountStore())

    def test_failed_page_query_fails_whole_listing(self):
        with pytest.raises(AggregationError, match="Could not load orders"):
            _list(FailingPageStore())

    def test_cause_is_the_store_error(self):
        with pytest.raises(AggregationError) as exc_info:
            _list(FailingPageStore())
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_timeout_fails_listing(self):
        aggregator = OrdersByStatus(SlowStore(), timeout=0.01)
        with pytest.raises(AggregationError, match="TimeoutError"):
            asyncio.run(aggregator.list(OrderFilter()))


class TestConcurrency:
    def test_queries_run_concurrently(self):
        store = TrackingStore()
        listing = _list(store)
        # One page query plus five status counts and the grand total
        assert store.peak == 7
        assert store.in_flight == 0
        assert listing.status_counts["total"] == 0
