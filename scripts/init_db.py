import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from movieapi.config import settings
from movieapi.database.connection import engine
from movieapi.database.session import init_db as create_tables


def init_db():
    """Create all tables in the configured database."""
    try:
        create_tables(engine)
        print(f"Database initialized successfully: {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        print(f"Database initialization failed: {str(e)}")
        raise


if __name__ == "__main__":
    print(f"Environment: {settings.ENVIRONMENT}")
    init_db()
