"""Tests for the cart collaborator and the snapshot it exposes."""

from types import SimpleNamespace

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import OperationalError

from resto.data.models.cart_item import CartItemModel
from resto.domain.errors import ProductUnavailable
from resto.repos.cart_repo import CartRepo
from resto.services.cart_service import CartService


class TestAddItem:

    def test_first_add_creates_cart(self, db, make_product):
        a = make_product()

        CartService(db).add_item("c1", a, 2)

        snapshot = CartRepo(db).load_snapshot("c1")
        assert snapshot.cart_id is not None
        assert [(line.product_id, line.quantity) for line in snapshot.lines] == [(a, 2)]

    def test_same_product_increments_quantity(self, db, make_product):
        a = make_product()
        svc = CartService(db)

        svc.add_item("c1", a, 2)
        svc.add_item("c1", a, 3)

        lines = CartRepo(db).load_snapshot("c1").lines
        assert len(lines) == 1
        assert lines[0].quantity == 5

    def test_inactive_product_rejected(self, db, make_product):
        a = make_product(is_active=False)

        with pytest.raises(ProductUnavailable):
            CartService(db).add_item("c1", a, 1)
        assert CartRepo(db).get_cart_by_customer("c1") is None

    def test_unknown_product_rejected(self, db):
        with pytest.raises(ProductUnavailable):
            CartService(db).add_item("c1", "no-such-product", 1)

    def test_every_change_bumps_the_version(self, db, make_product):
        a = make_product()
        b = make_product("Es Teh")
        svc = CartService(db)

        svc.add_item("c1", a, 1)
        first = CartRepo(db).load_snapshot("c1").version
        svc.add_item("c1", b, 1)

        assert CartRepo(db).load_snapshot("c1").version == first + 1

    def test_cart_removed_underneath_is_recreated(self, db, make_product):
        a = make_product()
        b = make_product("Es Teh")
        svc = CartService(db)
        svc.add_item("c1", a, 1)
        stale = SimpleNamespace(id=CartRepo(db).get_cart_by_customer("c1").id)
        # checked out from another request after this one looked the cart up
        CartService(db).clear("c1")

        real_get = svc.repo.get_cart_by_customer
        lookups = []

        def stale_then_real(customer_id):
            lookups.append(customer_id)
            return stale if len(lookups) == 1 else real_get(customer_id)

        svc.repo.get_cart_by_customer = stale_then_real

        svc.add_item("c1", b, 2)

        snapshot = CartRepo(db).load_snapshot("c1")
        assert [(line.product_id, line.quantity) for line in snapshot.lines] == [(b, 2)]
        assert len(lookups) == 2


class TestGetCart:

    def test_no_cart_is_empty_view(self, db):
        assert CartService(db).get_cart("c1") == {"items": [], "updated_at": None}

    def test_lines_keep_insertion_order_with_product_fields(self, db, make_product):
        a = make_product("Nasi Goreng", price=25000, stock=7)
        b = make_product("Es Teh", price=8000, stock=3, category="DRINK")
        svc = CartService(db)
        svc.add_item("c1", b, 1)
        svc.add_item("c1", a, 2)

        view = svc.get_cart("c1")

        assert view["updated_at"] is not None
        assert view["items"] == [
            {
                "id": b,
                "name": "Es Teh",
                "price": 8000,
                "image": "",
                "category": "DRINK",
                "is_active": True,
                "stock": 3,
                "quantity": 1,
            },
            {
                "id": a,
                "name": "Nasi Goreng",
                "price": 25000,
                "image": "",
                "category": "MAIN",
                "is_active": True,
                "stock": 7,
                "quantity": 2,
            },
        ]

    def test_snapshot_reads_live_product_price(self, db, make_product, product_state):
        a = make_product(price=25000)
        CartService(db).add_item("c1", a, 1)
        product_state(a).price = 27000
        db.commit()

        assert CartRepo(db).load_snapshot("c1").lines[0].price == 27000


class TestClear:

    def test_clear_removes_cart_and_lines(self, db, make_product):
        a = make_product()
        svc = CartService(db)
        svc.add_item("c1", a, 1)

        svc.clear("c1")

        assert CartRepo(db).get_cart_by_customer("c1") is None
        assert svc.get_cart("c1")["items"] == []

    def test_clear_without_cart_is_fine(self, db):
        CartService(db).clear("c1")

    def test_failed_clear_keeps_the_cart(self, db, make_product):
        a = make_product()
        svc = CartService(db)
        svc.add_item("c1", a, 1)

        def broken_delete(cart_id):
            svc.repo.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
            raise OperationalError("DELETE FROM carts", {}, Exception("database is locked"))

        svc.repo.delete_cart = broken_delete

        with pytest.raises(OperationalError):
            svc.clear("c1")

        assert [line.product_id for line in CartRepo(db).load_snapshot("c1").lines] == [a]
