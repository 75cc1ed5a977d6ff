"""Tests for the persistent cart store: merge, clamp, removal and change signals."""

import json

from cart.item import CartItem
from cart.signals import ChangeBus
from cart.storage import InMemoryStorage
from cart.store import CART_KEY, CartStore
from cart.totals import cart_item_count, cart_total


def _item(variant_id="A", quantity=1, stock=5, price=100, **overrides):
    data = {
        "product_id": f"prod-{variant_id}",
        "variant_id": variant_id,
        "product_name": f"Product {variant_id}",
        "price": price,
        "quantity": quantity,
        "stock": stock,
    }
    data.update(overrides)
    return CartItem(**data)


def _make_store(initial=None):
    storage = InMemoryStorage(initial)
    bus = ChangeBus()
    signals = []
    bus.subscribe(lambda: signals.append(1))
    return CartStore(storage, bus), storage, signals


class TestRead:
    def test_missing_storage_reads_as_empty(self):
        store, _, _ = _make_store()
        assert store.read() == []

    def test_corrupt_json_reads_as_empty(self):
        store, _, _ = _make_store({CART_KEY: "{broken"})
        assert store.read() == []

    def test_wrong_shape_reads_as_empty(self):
        store, _, _ = _make_store({CART_KEY: json.dumps({"variantId": "A"})})
        assert store.read() == []

    def test_invariant_violation_reads_as_empty(self):
        raw = json.dumps(
            [{"productId": "p", "variantId": "A", "productName": "P", "price": 1, "quantity": 9, "stock": 2}]
        )
        store, _, _ = _make_store({CART_KEY: raw})
        assert store.read() == []

    def test_read_does_not_signal(self):
        store, _, signals = _make_store()
        store.read()
        assert signals == []

    def test_storage_os_error_reads_as_empty(self):
        class BrokenStorage(InMemoryStorage):
            def get(self, key):
                raise PermissionError("denied")

        store = CartStore(BrokenStorage())
        assert store.read() == []


class TestAdd:
    def test_add_new_variant_appends(self):
        store, _, _ = _make_store()
        store.add(_item("A"))
        store.add(_item("B"))
        assert [i.variant_id for i in store.read()] == ["A", "B"]

    def test_add_existing_variant_merges_quantity(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=2))
        store.add(_item("A", quantity=2))
        items = store.read()
        assert len(items) == 1
        assert items[0].quantity == 4

    def test_merge_is_capped_at_stock(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=4, stock=5))
        store.add(_item("A", quantity=3, stock=5))
        assert store.read()[0].quantity == 5

    def test_merge_keeps_original_price_snapshot(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=1, price=100))
        store.add(_item("A", quantity=1, price=999))
        assert store.read()[0].price == 100

    def test_variants_stay_unique_over_many_adds(self):
        store, _, _ = _make_store()
        for variant_id in ["A", "B", "A", "C", "B", "A"]:
            store.add(_item(variant_id, quantity=2, stock=3))
        items = store.read()
        assert sorted(i.variant_id for i in items) == ["A", "B", "C"]
        assert all(1 <= i.quantity <= i.stock for i in items)

    def test_add_persists_whole_cart(self):
        store, storage, _ = _make_store()
        store.add(_item("A"))
        store.add(_item("B"))
        key, value = storage.writes[-1]
        assert key == CART_KEY
        assert [row["variantId"] for row in json.loads(value)] == ["A", "B"]

    def test_add_does_not_share_state_with_caller(self):
        store, _, _ = _make_store()
        item = _item("A", quantity=1)
        store.add(item)
        store.add(_item("A", quantity=1))
        assert item.quantity == 1


class TestSetQuantity:
    def test_sets_quantity(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=1, stock=5))
        store.set_quantity("A", 3)
        assert store.read()[0].quantity == 3

    def test_clamps_to_stock(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=1, stock=5))
        store.set_quantity("A", 10)
        assert store.read()[0].quantity == 5

    def test_clamps_to_one(self):
        store, _, _ = _make_store()
        store.add(_item("A", quantity=3, stock=5))
        store.set_quantity("A", 0)
        assert store.read()[0].quantity == 1

    def test_unknown_variant_is_noop_but_still_writes(self):
        store, storage, signals = _make_store()
        store.add(_item("A", quantity=2))
        writes_before = len(storage.writes)
        signals.clear()

        store.set_quantity("missing", 3)

        assert store.read()[0].quantity == 2
        assert len(storage.writes) == writes_before + 1
        assert signals == [1]


class TestRemoveAndClear:
    def test_remove(self):
        store, _, _ = _make_store()
        store.add(_item("A"))
        store.add(_item("B"))
        store.remove("A")
        assert [i.variant_id for i in store.read()] == ["B"]

    def test_remove_unknown_variant_keeps_cart(self):
        store, _, _ = _make_store()
        store.add(_item("A"))
        store.remove("missing")
        assert len(store.read()) == 1

    def test_clear(self):
        store, _, _ = _make_store()
        store.add(_item("A"))
        store.clear()
        assert store.read() == []


class TestBroadcastOnMutation:
    def test_each_mutation_signals_exactly_once(self):
        store, _, signals = _make_store()

        store.add(_item("A"))
        assert len(signals) == 1
        store.add(_item("A"))
        assert len(signals) == 2
        store.set_quantity("A", 1)
        assert len(signals) == 3
        store.remove("A")
        assert len(signals) == 4
        store.clear()
        assert len(signals) == 5

    def test_redundant_mutations_still_signal(self):
        store, _, signals = _make_store()
        store.clear()
        store.clear()
        store.remove("nothing")
        assert len(signals) == 3

    def test_listener_sees_new_state_when_signalled(self):
        store, _, _ = _make_store()
        seen = []
        store.bus.subscribe(lambda: seen.append(cart_item_count(store.read())))
        store.add(_item("A", quantity=2))
        assert seen == [2]


class TestCheckoutScenarios:
    def test_add_merge_then_derive(self):
        store, _, _ = _make_store()
        store.add(_item("A", price=100, quantity=2, stock=5))
        store.add(_item("A", price=100, quantity=2, stock=5))

        items = store.read()
        assert [(i.variant_id, i.quantity) for i in items] == [("A", 4)]
        assert cart_total(items) == 400
        assert cart_item_count(items) == 4

    def test_set_quantity_above_stock_is_clamped(self):
        store, _, _ = _make_store()
        store.add(_item("A", price=100, quantity=2, stock=5))
        store.set_quantity("A", 10)
        assert store.read()[0].quantity == 5
