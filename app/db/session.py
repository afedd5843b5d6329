from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.models.database import Base


def create_db_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests are served from a worker thread, not the one that connected
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)
