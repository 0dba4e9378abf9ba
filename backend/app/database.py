import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, database_url: str):
        self.database_url = database_url

        # SQLite needs different config than PostgreSQL
        if database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in database_url or database_url == "sqlite://":
                # Share the single in-memory connection across sessions
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(database_url, **kwargs)
        else:
            self.engine = create_engine(
                database_url,
                pool_pre_ping=True,
                pool_size=10,
                max_overflow=20
            )

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        """Create tables for every registered model."""
        # Models must be imported so they register on Base.metadata
        from app import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready")

    def dispose(self):
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request):
    """Dependency for getting database sessions."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
