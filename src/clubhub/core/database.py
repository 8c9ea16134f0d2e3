"""Database connection and session management.

This module handles the database connection using SQLAlchemy. SQLite is the
default backend; any SQLAlchemy URL can be supplied via DATABASE_URL.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from clubhub.config import DATA_DIR, DATABASE_URL
from clubhub.models.base import Base
# Import models to ensure they are registered with Base.metadata
import clubhub.models  # noqa: F401


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create an engine, applying SQLite specific connection options."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE clauses unless foreign keys are switched on
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


if DATABASE_URL.startswith("sqlite:///") and ":memory:" not in DATABASE_URL:
    DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
