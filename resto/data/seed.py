# resto/data/seed.py
from resto.data.database import Database
from resto.data.models.product import ProductModel
from resto.domain.enums import Category
from resto.repos.product_repo import ProductRepo
from resto.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

MENU = [
    ("Nasi Goreng", 25000, Category.MAIN, 50),
    ("Mie Ayam", 22000, Category.MAIN, 40),
    ("Sate Ayam", 30000, Category.MAIN, 30),
    ("Pisang Goreng", 12000, Category.APPETIZER, 60),
    ("Tahu Isi", 10000, Category.APPETIZER, 60),
    ("Es Teh Manis", 8000, Category.DRINK, 100),
    ("Es Jeruk", 10000, Category.DRINK, 80),
]


def seed(database: Database | None = None) -> int:
    database = database or Database()
    database.create_all()

    db = database.session()
    try:
        repo = ProductRepo(db)
        # not forcing: only seed if empty
        if repo.list_products():
            return 0
        for name, price, category, stock in MENU:
            repo.add_product(ProductModel(name=name, price=price, category=category.value, stock=stock))
        db.commit()
        logger.info(f"Seeded {len(MENU)} products")
        return len(MENU)
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    seed()
