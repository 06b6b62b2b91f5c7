from typing import Optional


class KeyValueStore:
    """Interface/base class for the durable side-channel a session writes its history to."""
    def get(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def set(self, key: str, value: bytes) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
