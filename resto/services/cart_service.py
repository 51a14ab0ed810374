# resto/services/cart_service.py
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resto.data.models.cart_item import CartItemModel
from resto.domain.errors import ProductUnavailable, TransientConflict
from resto.repos.cart_repo import CartRepo
from resto.repos.product_repo import ProductRepo
from resto.utils.retry import conflict_retry
from resto.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Plain cart operations for the customer app.
    query (get) reads the same snapshot checkout uses,
    commands (add, clear) change the cart and commit right away.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, customer_id: str) -> Dict[str, Any]:
        snapshot = self.repo.load_snapshot(customer_id)

        return {
            "items": [
                {
                    "id": line.product_id,
                    "name": line.name,
                    "price": line.price,
                    "image": line.image,
                    "category": line.category,
                    "is_active": line.is_active,
                    "stock": line.stock,
                    "quantity": line.quantity,
                }
                for line in snapshot.lines
            ],
            "updated_at": snapshot.updated_at,
        }

    #commands
    @conflict_retry()
    def add_item(self, customer_id: str, product_id: str, quantity: int) -> None:
        product = self.products.get_product(product_id)
        if not product or not product.is_active:
            raise ProductUnavailable()

        try:
            cart = self._ensure_cart(customer_id)

            # version bump first: it locks the cart row, and a checkout that
            # priced the old version has to start over
            if not self.repo.touch(cart.id):
                logger.warning(f"Cart {cart.id} of customer {customer_id} is gone, retrying")
                raise TransientConflict()

            existing_item = self.repo.get_cart_item(cart.id, product_id)
            if existing_item:
                logger.info(
                    f"Product {product_id} already in cart {cart.id}, qty "
                    f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
                )
                existing_item.quantity += quantity
            else:
                self.repo.add_cart_item(
                    CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
                )

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    def clear(self, customer_id: str) -> None:
        cart = self.repo.get_cart_by_customer(customer_id)
        if not cart:
            return

        cart_id = cart.id
        try:
            self.repo.delete_cart(cart_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart {cart_id} of customer {customer_id} cleared")

    def _ensure_cart(self, customer_id: str):
        cart = self.repo.get_cart_by_customer(customer_id)
        if cart:
            return cart

        #lazy create, a parallel request may have created it a moment ago.
        #nothing written yet in this transaction, so a full rollback is safe
        try:
            cart = self.repo.create_cart(customer_id)
            logger.info(f"Created cart {cart.id} for customer {customer_id}")
            return cart
        except IntegrityError:
            self.repo.rollback()
            return self.repo.get_cart_by_customer(customer_id)
