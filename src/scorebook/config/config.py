import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from scorebook.constants import (
    DEFAULT_STATE_KEY,
    DEFAULT_STORE_DIR,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_TICK_INTERVAL,
)
from scorebook.infra.db import create_session_factory
from scorebook.infra.repo.side_channel.base import KeyValueStore
from scorebook.infra.repo.side_channel.local import LocalFileKeyValueStore
from scorebook.infra.repo.side_channel.sql import SqlKeyValueStore


@dataclass(frozen=True)
class ScorebookConfig:
    """Settings for one scoring session"""
    state_key: str = DEFAULT_STATE_KEY
    # None keeps every snapshot
    history_limit: Optional[int] = DEFAULT_HISTORY_LIMIT
    store_dir: Path = Path(DEFAULT_STORE_DIR)
    database_url: Optional[str] = None
    strict_team_ids: bool = False
    tick_interval: float = DEFAULT_TICK_INTERVAL
    log_dir: Path = Path('logs')

    @classmethod
    def from_env(cls) -> 'ScorebookConfig':
        return cls(
            state_key=os.getenv('SCOREBOOK_STATE_KEY', DEFAULT_STATE_KEY),
            history_limit=_env_history_limit('SCOREBOOK_HISTORY_LIMIT'),
            store_dir=Path(os.getenv('SCOREBOOK_STORE_DIR', DEFAULT_STORE_DIR)),
            database_url=os.getenv('SCOREBOOK_DATABASE_URL') or None,
            strict_team_ids=_env_flag('SCOREBOOK_STRICT_TEAM_IDS'),
            tick_interval=float(os.getenv('SCOREBOOK_TICK_INTERVAL', str(DEFAULT_TICK_INTERVAL))),
            log_dir=Path(os.getenv('SCOREBOOK_LOG_DIR', 'logs')),
        )


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in ('1', 'true', 'yes', 'on')


def _env_history_limit(name: str) -> Optional[int]:
    """Positive integer, or None (unbounded) for 0 or an empty value."""
    raw = os.getenv(name, str(DEFAULT_HISTORY_LIMIT)).strip()
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number of snapshots, got {raw!r}") from None
    return limit if limit > 0 else None


def build_side_channel(config: ScorebookConfig) -> KeyValueStore:
    """SQL table when a database URL is configured, otherwise a local directory."""
    if config.database_url:
        return SqlKeyValueStore(session_factory=create_session_factory(config.database_url))
    return LocalFileKeyValueStore(config.store_dir)
