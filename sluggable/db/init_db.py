import logging

from sqlalchemy.engine import Engine

from sluggable.db.session import Base

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Create tables for every model registered on ``Base``."""
    tables = sorted(Base.metadata.tables)
    logger.info("Creating tables on %s: %s", engine.url.render_as_string(hide_password=True),
                ", ".join(tables) or "(none)")
    Base.metadata.create_all(bind=engine)
