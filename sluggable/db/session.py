from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from sluggable.core.config import settings

Base = declarative_base()


def create_session_factory(database_url: Optional[str] = None, **engine_kwargs) -> sessionmaker:
    """Build a session factory bound to a new engine for ``database_url``.

    Falls back to ``settings.DATABASE_URL``.
    """
    engine = create_engine(
        database_url or settings.DATABASE_URL,
        pool_pre_ping=True,
        **engine_kwargs
    )
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(session_factory: sessionmaker) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
