# resto/data/database.py
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from resto.utils.settings import DATABASE_URL
from resto.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": 30}}
        # in-memory db lives in a single connection, share it across threads
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


class Database:
    """
    Explicit handle for the relational store.
    Created once per process, opened in the app lifespan, disposed on shutdown.
    """

    def __init__(self, url: str | None = None):
        self.url = url or DATABASE_URL
        self.engine = make_engine(self.url)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=True)

    def create_all(self) -> None:
        # models must be imported before create_all so they land in Base.metadata
        import resto.data.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
