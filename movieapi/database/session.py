import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from movieapi.database.connection import SessionLocal
from movieapi.models import Base

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=engine)


def ping_db(engine: Engine) -> bool:
    """True if the store answers a trivial query."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        logger.warning(f"Database ping failed: {exc}")
        return False
