# floordepot/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from floordepot.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Local SQLite store for client-side configuration
#
# Only one value lives here (the Apps Script URL supplied by the
# administrator). The product catalog itself is never stored locally,
# the Google Sheet is the single source of truth.
#
# check_same_thread=False: FastAPI runs sync dependencies in a
# threadpool, so the connection may be used from another thread.
# ---------------------------------------------------------


def build_engine(db_url: str) -> Engine:
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables(bind: Engine | None = None) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(bind or engine)
