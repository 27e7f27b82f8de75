"""Database engine setup."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from catlingo.config import get_settings

engine = create_engine(
    get_settings().database_url,
    echo=False,
    pool_pre_ping=True,  # Validate connections before use (prevents stale connection errors)
)

SessionLocal = sessionmaker(engine, class_=Session, expire_on_commit=False)


def get_session() -> Generator[Session, None, None]:
    """Yield a database session."""
    with SessionLocal() as session:
        yield session
