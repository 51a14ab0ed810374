# resto/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from resto.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.name)).scalars())

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def decrement_stock(self, product_id: str, quantity: int, require_available: bool = False) -> bool:
        """
        Atomic `stock = stock - qty` in the database, so concurrent decrements never
        overwrite each other. With require_available the update only applies while
        enough stock is left; returns False when no row was changed.
        """
        stmt = (
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if require_available:
            stmt = stmt.where(ProductModel.stock >= quantity)

        return self.db.execute(stmt).rowcount == 1
