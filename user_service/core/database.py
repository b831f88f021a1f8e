import logging
from typing import Generator

from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def create_db_engine(database_url: str) -> Engine:
    """
    Build the SQLAlchemy engine for a database URL.

    SQLite connections are shared across FastAPI's worker threads, so
    ``check_same_thread`` is disabled for them; other backends get a
    sized connection pool.
    """
    if database_url.startswith("sqlite"):
        db_engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug
        )
    else:
        db_engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=settings.debug
        )
    register_engine_events(db_engine)
    return db_engine


def register_engine_events(db_engine: Engine) -> None:
    """Attach connection listeners used for monitoring and SQLite setup"""

    @event.listens_for(db_engine, "connect")
    def receive_connect(dbapi_connection, connection_record):
        if db_engine.dialect.name == "sqlite":
            # SQLite ignores REFERENCES clauses unless enabled per connection
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
        logger.info("Database connection established")

    @event.listens_for(db_engine, "checkout")
    def receive_checkout(dbapi_connection, connection_record, connection_proxy):
        logger.debug("Database connection checked out from pool")


engine = create_db_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base class for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Database dependency for FastAPI

    Yields:
        Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """
    Create all tables registered on ``Base``.

    Errors are not swallowed: a service that cannot create its schema
    should not start.
    """
    # Import all models here to ensure they are registered
    from ..models import user, task  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully")


def check_db_connection(db: Session) -> bool:
    """
    Check database connectivity through a request session

    Returns:
        bool: True if connected, False otherwise
    """
    try:
        db.execute(text("SELECT 1"))
        logger.debug("Database connection check successful")
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
