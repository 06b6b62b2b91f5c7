from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from scorebook.infra.models import SideChannelModel
from scorebook.infra.repo.side_channel.base import KeyValueStore


class SqlKeyValueStore(KeyValueStore):
    def __init__(self, session_factory: Callable[[], Session]):
        """
        session_factory should be something like:
            session_factory = sessionmaker(bind=engine)
        so we can create new Sessions on demand.
        """
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[bytes]:
        session: Session = self.session_factory()
        try:
            row = session.get(SideChannelModel, key)
            return None if row is None else bytes(row.value)
        finally:
            session.close()

    def set(self, key: str, value: bytes) -> None:
        session: Session = self.session_factory()
        try:
            session.merge(
                SideChannelModel(
                    key=key,
                    value=value,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def delete(self, key: str) -> None:
        session: Session = self.session_factory()
        try:
            session.query(SideChannelModel).filter_by(key=key).delete()
            session.commit()
        finally:
            session.close()
