# resto/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, delete, update
from sqlalchemy.orm import Session

from resto.data.models.cart import CartModel
from resto.data.models.cart_item import CartItemModel
from resto.data.models.product import ProductModel
from resto.domain.checkout import CartLine, CartSnapshot


class CartRepo:
    """Writes only flush; the calling service owns commit/rollback."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_customer(self, customer_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def load_snapshot(self, customer_id: str) -> CartSnapshot:
        # one statement: cart lines joined with the product fields checkout needs
        rows = self.db.execute(
            select(
                CartModel.id,
                CartModel.updated_at,
                CartModel.version,
                CartItemModel.quantity,
                ProductModel.id,
                ProductModel.name,
                ProductModel.price,
                ProductModel.stock,
                ProductModel.is_active,
                ProductModel.image_url,
                ProductModel.category,
            )
            .select_from(CartModel)
            .outerjoin(CartItemModel, CartItemModel.cart_id == CartModel.id)
            .outerjoin(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartModel.customer_id == customer_id)
            .order_by(CartItemModel.id)
        ).all()

        if not rows:
            return CartSnapshot(cart_id=None)

        cart_id, updated_at, version = rows[0][0], rows[0][1], rows[0][2]
        lines = [
            CartLine(
                product_id=product_id,
                name=name,
                price=price,
                stock=stock,
                is_active=is_active,
                image=image_url or "",
                category=category,
                quantity=quantity,
            )
            for (_, _, _, quantity, product_id, name, price, stock, is_active, image_url, category) in rows
            if product_id is not None
        ]
        return CartSnapshot(cart_id=cart_id, updated_at=updated_at, version=version, lines=lines)

    def create_cart(self, customer_id: str) -> CartModel:
        cart = CartModel(customer_id=customer_id)
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_item(self, cart_id: int, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def touch(self, cart_id: int) -> int:
        # 0 rows: the cart was checked out or cleared since it was read
        return self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id)
            .values(updated_at=datetime.now(timezone.utc), version=CartModel.version + 1)
            .execution_options(synchronize_session=False)
        ).rowcount

    def claim_version(self, cart_id: int, expected_version: int) -> bool:
        """
        Optimistic lock on the cart: bump the version only if nobody changed the
        cart since `expected_version` was read. False means the snapshot is stale.
        """
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == expected_version)
            .values(version=CartModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete_cart(self, cart_id: int) -> int:
        #items first, sqlite does not enforce ON DELETE CASCADE by default
        self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(
            delete(CartModel)
            .where(CartModel.id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
