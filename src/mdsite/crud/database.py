"""Database engine and schema helpers for the build history store"""

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

# Register tables on SQLModel.metadata
from mdsite.crud import models  # noqa: F401


def make_engine(db_url: str) -> Engine:
    return create_engine(db_url, echo=False)


def init_db(engine: Engine) -> None:
    """Create all history tables if they do not exist."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine: Engine) -> None:
    """Drop and recreate all history tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)