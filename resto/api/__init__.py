# resto/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from resto.api.errors import register_error_handlers
from resto.api.routers import cart, checkout, health, orders
from resto.data.database import Database
from resto.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(database: Database | None = None, create_tables: bool = True) -> FastAPI:
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting, database {database.engine.url.render_as_string(hide_password=True)}")
        if create_tables:
            database.create_all()
        yield
        database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title="Resto Ordering Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)

    return app
