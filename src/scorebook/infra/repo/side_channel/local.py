import os
import re
import logging
from pathlib import Path
from typing import Optional, Union

import filelock

from scorebook.infra.repo.side_channel.base import KeyValueStore

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9_.-]')


class LocalFileKeyValueStore(KeyValueStore):
    """
    Side-channel backed by a local directory, one file per key:

    data/scorebook/
        currentGameState.json
        match-42.json

    Writes go to a temp file first and are swapped in with os.replace,
    so a crash mid-write leaves the previous value readable. A per-key
    lock file keeps two processes from writing the same key at once.
    """
    def __init__(self, directory: Union[str, Path], suffix: str = '.json', lock_timeout: float = 10):
        self.directory = Path(directory)
        self.suffix = suffix
        self.lock_timeout = lock_timeout
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}{self.suffix}"

    def _lock(self, path: Path) -> filelock.FileLock:
        return filelock.FileLock(str(path.with_name(path.name + '.lock')), timeout=self.lock_timeout)

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        tmp_path = path.with_name(path.name + '.tmp')
        try:
            with self._lock(path):
                with open(tmp_path, 'wb') as f:
                    f.write(value)
                os.replace(tmp_path, path)
        except filelock.Timeout:
            logger.warning(f"Timed out waiting for lock on {path}")
            raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        with self._lock(path):
            if path.exists():
                path.unlink()
                logger.info(f"Deleted side-channel file {path}")
