from typing import Dict, Optional

from scorebook.infra.repo.side_channel.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Nothing survives a restart; useful for tests and viewer sessions."""
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._storage: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._storage.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._storage[key] = bytes(value)

    def delete(self, key: str) -> None:
        self._storage.pop(key, None)
