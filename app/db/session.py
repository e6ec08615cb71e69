# session.py
# Configures the database connection and session management using SQLAlchemy.

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import settings

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # The connection pool hands SQLite connections to FastAPI's worker threads.
        return {"check_same_thread": False}
    if url.startswith("postgresql") and settings.ENVIRONMENT == "production":
        return {"sslmode": "require"}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.DATABASE_ECHO,
)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE unless this is set per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def initialize_schema():
    """
    Create every table and index that does not exist yet.
    Runs in a single transaction, so a failure leaves nothing half-created.
    """
    # Models must be registered on Base.metadata before create_all runs
    from app import models  # noqa: F401

    with engine.begin() as connection:
        Base.metadata.create_all(bind=connection)
    logger.info("Database tables created successfully")


def shutdown():
    """
    Release all pooled connections.
    """
    engine.dispose()
    logger.info("Database connection pool closed")


# Dependency to get a database session.
# This will be used in our API endpoints to get a session for database operations.
def get_db():
    """
    SQLAlchemy session generator.
    Yields a session and ensures it's closed afterward.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
