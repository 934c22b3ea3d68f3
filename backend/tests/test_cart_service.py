"""
Tests del CartAggregator: fusión de líneas por (id, variante), límites de
stock, totales con precio guardado y persistencia tras cada cambio.
"""
import json

import pytest

from conftest import FailingStorage, make_item
from storefront.core.exceptions import InvalidVariant, OutOfStock
from storefront.schemas.cart_schema import CartState
from storefront.services.cart_service import CartAggregator


class TestAddItem:

    def test_first_add_creates_line_with_quantity_one(self, cart):
        cart.add_item(make_item("p1", quantity=5, offer_price=100))

        assert len(cart.lines) == 1
        assert cart.lines[0].requested_quantity == 1
        assert cart.total_items() == 1
        assert cart.total_price() == 100

    def test_same_item_twice_merges_into_one_line(self, cart):
        item = make_item("p1", quantity=5, offer_price=100)
        cart.add_item(item)
        cart.add_item(item)

        assert len(cart.lines) == 1
        assert cart.lines[0].requested_quantity == 2
        assert cart.total_price() == 200

    def test_add_stops_at_stock_without_error(self, cart):
        item = make_item("p1", quantity=2)
        for _ in range(5):
            cart.add_item(item)

        assert cart.lines[0].requested_quantity == 2

    def test_out_of_stock_item_is_rejected(self, cart, storage):
        cart.add_item(make_item("p1"))
        before = cart.lines
        stored_before = storage.get(cart.storage_key)

        with pytest.raises(OutOfStock) as exc_info:
            cart.add_item(make_item("p2", quantity=0))

        assert exc_info.value.product_id == "p2"
        assert cart.lines == before
        assert storage.get(cart.storage_key) == stored_before

    def test_out_of_stock_on_empty_cart_creates_nothing(self, cart):
        with pytest.raises(OutOfStock):
            cart.add_item(make_item("p1", quantity=0))

        assert cart.lines == []
        assert cart.total_items() == 0

    def test_variants_are_separate_lines(self, cart):
        item = make_item("p1", color_variants=["Red", "Blue"])
        cart.add_item(item, "Red")
        cart.add_item(item, "Blue")
        cart.add_item(item, "Red")

        keys = [(line.identity_key, line.requested_quantity) for line in cart.lines]
        assert keys == [(("p1", "Red"), 2), (("p1", "Blue"), 1)]

    def test_insertion_order_is_preserved(self, cart):
        for product_id in ["c", "a", "b"]:
            cart.add_item(make_item(product_id))
        cart.add_item(make_item("a"))

        assert [line.id for line in cart.lines] == ["c", "a", "b"]

    def test_unknown_variant_is_rejected(self, cart):
        with pytest.raises(InvalidVariant):
            cart.add_item(make_item("p1", color_variants=["Red"]), "Green")
        with pytest.raises(InvalidVariant):
            cart.add_item(make_item("p2"), "Red")

        assert cart.lines == []

    def test_identity_keys_never_repeat(self, cart):
        items = [make_item("p1", color_variants=["Red"]), make_item("p2", quantity=3)]
        sequence = [(0, "Red"), (1, None), (0, None), (0, "Red"), (1, None), (1, None), (1, None)]
        for index, variant in sequence:
            cart.add_item(items[index], variant)

        keys = [line.identity_key for line in cart.lines]
        assert len(keys) == len(set(keys))
        assert dict(zip(keys, (l.requested_quantity for l in cart.lines))) == {
            ("p1", "Red"): 2,
            ("p2", None): 3,
            ("p1", None): 1,
        }


class TestSetQuantity:

    @pytest.mark.parametrize("requested, expected", [(3, 3), (5, 5), (9, 5), (1, 1)])
    def test_quantity_is_clamped_to_stock(self, cart, requested, expected):
        cart.add_item(make_item("p1", quantity=5))
        cart.set_quantity("p1", None, requested)

        assert cart.lines[0].requested_quantity == expected

    @pytest.mark.parametrize("requested", [0, -1, -10])
    def test_zero_or_negative_removes_line(self, cart, requested):
        cart.add_item(make_item("p1", quantity=5))
        cart.set_quantity("p1", None, requested)

        assert cart.lines == []
        assert cart.total_items() == 0

    def test_absent_line_is_a_noop(self, cart):
        cart.add_item(make_item("p1"))
        before = cart.lines

        cart.set_quantity("missing", None, 3)
        cart.set_quantity("p1", "Red", 3)
        cart.set_quantity("missing", None, 0)

        assert cart.lines == before

    def test_clamp_uses_latest_catalog_stock(self, cart):
        cart.add_item(make_item("p1", quantity=2))
        cart.add_item(make_item("p1", quantity=10))  # el catálogo repone: nuevo límite 10

        cart.set_quantity("p1", None, 8)

        assert cart.lines[0].requested_quantity == 8
        assert cart.lines[0].quantity == 10


class TestReAddWithFreshStock:

    def test_stock_drop_clamps_line_down(self, cart):
        cart.add_item(make_item("p1", quantity=5))
        cart.add_item(make_item("p1", quantity=5))
        cart.add_item(make_item("p1", quantity=5))

        cart.add_item(make_item("p1", quantity=2))

        line = cart.lines[0]
        assert line.requested_quantity == 2
        assert line.quantity == 2

    def test_stock_drop_bounds_later_set_quantity(self, cart):
        cart.add_item(make_item("p1", quantity=5))
        cart.add_item(make_item("p1", quantity=3))

        cart.set_quantity("p1", None, 5)

        assert cart.lines[0].requested_quantity == 3

    def test_sold_out_re_add_is_rejected_and_line_kept(self, cart, storage):
        cart.add_item(make_item("p1", quantity=5))
        before = cart.lines
        stored_before = storage.get(cart.storage_key)

        with pytest.raises(OutOfStock):
            cart.add_item(make_item("p1", quantity=0))

        assert cart.lines == before
        assert cart.lines[0].requested_quantity == 1
        assert storage.get(cart.storage_key) == stored_before

    def test_re_add_keeps_snapshot_price(self, cart):
        cart.add_item(make_item("p1", quantity=2, offer_price=100))
        cart.add_item(make_item("p1", quantity=10, offer_price=150))

        assert cart.lines[0].offer_price == 100
        assert cart.total_price() == 200

    def test_re_add_at_same_limit_does_not_write(self, cart, storage):
        item = make_item("p1", quantity=1)
        cart.add_item(item)
        storage.set(cart.storage_key, "sentinel")

        cart.add_item(item)

        assert storage.get(cart.storage_key) == "sentinel"


class TestRemoveAndClear:

    def test_remove_existing_line(self, cart):
        item = make_item("p1", color_variants=["Red"])
        cart.add_item(item, "Red")
        cart.add_item(item)

        cart.remove_item("p1", "Red")

        assert [line.identity_key for line in cart.lines] == [("p1", None)]

    def test_remove_absent_leaves_state_structurally_equal(self, cart, storage):
        cart.add_item(make_item("p1"))
        cart.add_item(make_item("p2"))
        before = cart.state
        stored_before = storage.get(cart.storage_key)

        cart.remove_item("p3")
        cart.remove_item("p1", "Blue")

        assert cart.state == before
        assert storage.get(cart.storage_key) == stored_before

    def test_clear_empties_everything(self, cart, storage):
        cart.add_item(make_item("p1"))
        cart.add_item(make_item("p2"))

        cart.clear()

        assert cart.lines == []
        assert json.loads(storage.get(cart.storage_key)) == {"lines": []}


class TestTotals:

    def test_total_uses_snapshot_price_after_catalog_change(self, cart):
        cart.add_item(make_item("p1", offer_price=100))
        cart.add_item(make_item("p2", offer_price=40.5))
        # El catálogo sube el precio: la línea existente conserva el suyo
        cart.add_item(make_item("p1", offer_price=999))

        assert cart.total_price() == 100 * 2 + 40.5
        assert cart.total_price() == sum(l.offer_price * l.requested_quantity for l in cart.lines)

    def test_lines_are_copies(self, cart):
        cart.add_item(make_item("p1"))
        snapshot = cart.lines
        snapshot[0].requested_quantity = 99

        assert cart.lines[0].requested_quantity == 1


class TestPersistence:

    def test_every_mutation_writes_whole_state(self, cart, storage):
        cart.add_item(make_item("p1", offer_price=10))
        cart.add_item(make_item("p2", offer_price=20))
        cart.set_quantity("p2", None, 3)

        stored = CartState.model_validate_json(storage.get(cart.storage_key))
        assert [(l.id, l.requested_quantity) for l in stored.lines] == [("p1", 1), ("p2", 3)]

    def test_new_aggregator_reloads_persisted_cart(self, storage):
        first = CartAggregator(storage, "popandfun-cart:s1")
        first.add_item(make_item("p1", color_variants=["Red"]), "Red")
        first.add_item(make_item("p1", color_variants=["Red"]), "Red")

        second = CartAggregator(storage, "popandfun-cart:s1")

        assert second.state == first.state
        assert second.total_price() == 200

    def test_sessions_do_not_share_carts(self, storage):
        CartAggregator(storage, "popandfun-cart:a").add_item(make_item("p1"))

        assert CartAggregator(storage, "popandfun-cart:b").lines == []

    def test_corrupt_storage_starts_empty(self, storage):
        storage.set("popandfun-cart:bad", "{not json")

        assert CartAggregator(storage, "popandfun-cart:bad").lines == []

    def test_write_failure_is_not_fatal(self):
        cart = CartAggregator(FailingStorage(), "popandfun-cart:fail")

        cart.add_item(make_item("p1"))
        cart.add_item(make_item("p1"))

        assert cart.persisted is False
        assert cart.lines[0].requested_quantity == 2
        assert cart.total_price() == 200
