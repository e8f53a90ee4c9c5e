"""Generate database sessions"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine and ensure all tables are created"""
    engine = create_engine(database_url, echo=echo)
    Base.metadata.create_all(bind=engine)
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine)


def get_db(session_local: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_local()
    try:
        yield db
    finally:
        db.close()
