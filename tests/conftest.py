import pytest
from fastapi.testclient import TestClient

from resto.api import create_app
from resto.api.deps import get_gateway, get_notifier
from resto.data.database import Database
from resto.data.models.product import ProductModel
from resto.services.cart_service import CartService
from tests.fakes import FakeGateway, FakeNotifier


@pytest.fixture
def database(tmp_path):
    # file backed so every session gets its own connection, like in production
    database = Database(f"sqlite:///{tmp_path / 'resto.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_product(db):
    def _make(name="Nasi Goreng", price=25000, stock=10, is_active=True, category="MAIN"):
        product = ProductModel(name=name, price=price, stock=stock, is_active=is_active, category=category)
        db.add(product)
        db.commit()
        return product.id

    return _make


@pytest.fixture
def fill_cart(db):
    def _fill(customer_id, *lines):
        svc = CartService(db)
        for product_id, qty in lines:
            svc.add_item(customer_id, product_id, qty)

    return _fill


@pytest.fixture
def product_state(db):
    def _get(product_id):
        db.expire_all()
        return db.get(ProductModel, product_id)

    return _get


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(database, gateway, notifier):
    app = create_app(database=database, create_tables=False)
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
