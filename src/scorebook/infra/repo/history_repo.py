import json
import logging
from typing import Optional

from scorebook.constants import DEFAULT_STATE_KEY
from scorebook.domain.entities.match import MatchSnapshot
from scorebook.domain.history import HistoryStore
from scorebook.infra.repo.side_channel.base import KeyValueStore

logger = logging.getLogger(__name__)


class HistoryDecodeError(ValueError):
    """Raised when a stored history document can't be turned back into a HistoryStore."""


def dumps(store: HistoryStore) -> bytes:
    """
    Serialize the whole store:
    {
      "past":    [ {snapshot}, ... ],   # oldest first
      "present": {snapshot},
      "future":  [ {snapshot}, ... ]    # next redo first
    }
    """
    document = {
        'past': [s.to_dict() for s in store.past],
        'present': store.present.to_dict(),
        'future': [s.to_dict() for s in store.future],
    }
    return json.dumps(document).encode('utf-8')


def loads(raw: bytes) -> HistoryStore:
    try:
        document = json.loads(raw.decode('utf-8'))
        return HistoryStore(
            past=tuple(MatchSnapshot.from_dict(s) for s in document.get('past') or []),
            present=MatchSnapshot.from_dict(document['present']),
            future=tuple(MatchSnapshot.from_dict(s) for s in document.get('future') or []),
        )
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise HistoryDecodeError(f"Corrupt history document: {e}") from e


class HistoryRepository:
    """Reads and writes one session's history under a single side-channel key."""
    def __init__(self, side_channel: KeyValueStore, key: str = DEFAULT_STATE_KEY):
        self.side_channel = side_channel
        self.key = key

    def load(self) -> Optional[HistoryStore]:
        raw = self.side_channel.get(self.key)
        if raw is None:
            return None
        return loads(raw)

    def save(self, store: HistoryStore) -> None:
        # full overwrite, never incremental
        self.side_channel.set(self.key, dumps(store))

    def delete(self) -> None:
        self.side_channel.delete(self.key)
        logger.info(f"Cleared saved history under '{self.key}'")
