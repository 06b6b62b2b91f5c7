from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from scorebook.infra.models import Base


def create_session_factory(database_url: str, echo: bool = False):
    """
    1. Create the engine for `database_url` (e.g. 'sqlite:///scorebook.db')
    2. Create the side-channel table if it doesn't exist
    3. Return a configured Session class
    """
    engine = create_engine(database_url, echo=echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
