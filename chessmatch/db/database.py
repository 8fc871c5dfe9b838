"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessmatch.core.config import Settings
from chessmatch.db.schema import Base


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    engine = create_engine(database_url, echo=echo)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(settings: Optional[Settings] = None) -> Generator[Session, None, None]:
    settings = settings or Settings.from_env()
    session_local = create_session_factory(settings.database_url)
    db = session_local()
    try:
        yield db
    finally:
        db.close()
