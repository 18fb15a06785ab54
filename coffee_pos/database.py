"""
Database engine, session factory and request-scoped session dependency
"""
import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from coffee_pos.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create SQLAlchemy engine for the given URL
    
    In-memory SQLite shares one connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory bound to engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine, settings: Settings) -> None:
    """Create tables, waiting for the database to come up"""
    # Import models so they register on Base.metadata
    from coffee_pos.models import document  # noqa: F401
    
    @retry(
        stop=stop_after_attempt(settings.DB_CONNECT_RETRIES),
        wait=wait_exponential(multiplier=settings.DB_RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type(OperationalError),
        reraise=True
    )
    def _connect_and_create():
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=engine)
    
    _connect_and_create()
    logger.info("Database initialized")


def get_db(request: Request):
    """Dependency yielding a session from the app's session factory"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
