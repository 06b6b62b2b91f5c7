import logging
import threading
from typing import Optional

from scorebook.config.config import ScorebookConfig
from scorebook.domain.commands import Command, TimerTick
from scorebook.domain.engine import MatchEngine
from scorebook.domain.entities.match import MatchSnapshot
from scorebook.domain.history import HistoryStore, reduce
from scorebook.infra.repo.history_repo import HistoryDecodeError, HistoryRepository
from scorebook.infra.repo.side_channel.base import KeyValueStore


class ScoringSession:
    """
    Owns the history of one live game.

    Every dispatch runs to completion under a lock, then the whole
    {past, present, future} document is written to the side-channel.
    A failed write is logged and never touches the in-memory history.
    """
    def __init__(
        self,
        match_id: str,
        default_store: HistoryStore,
        side_channel: KeyValueStore,
        config: Optional[ScorebookConfig] = None,
        engine: Optional[MatchEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.match_id = match_id
        self.config = config or ScorebookConfig()
        self.engine = engine or MatchEngine(strict_team_ids=self.config.strict_team_ids)
        self.logger = logger or logging.getLogger(__name__)
        self.repo = HistoryRepository(side_channel, key=self.config.state_key)

        self._lock = threading.Lock()
        self._store = self._restore(default_store)

    # ------------------------------------------------------------------
    # Start-up
    # ------------------------------------------------------------------

    def _restore(self, default_store: HistoryStore) -> HistoryStore:
        """Use the saved history when it belongs to this match, otherwise the default."""
        try:
            restored = self.repo.load()
        except HistoryDecodeError as e:
            self.logger.warning(f"Could not parse saved history for {self.match_id}: {e}. Starting fresh.")
            return default_store
        except Exception as e:
            self.logger.warning(f"Could not read saved history for {self.match_id}: {e}. Starting fresh.")
            return default_store

        if restored is None:
            self.logger.info(f"No saved history for {self.match_id}, using initial state")
            return default_store
        if restored.present.match_id != self.match_id:
            self.logger.warning(
                f"Saved history belongs to match {restored.present.match_id}, "
                f"not {self.match_id}. Starting fresh."
            )
            return default_store

        self.logger.info(
            f"Restored {self.match_id}: {len(restored.past)} undo / {len(restored.future)} redo steps"
        )
        return restored

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def history(self) -> HistoryStore:
        return self._store

    def current_snapshot(self) -> MatchSnapshot:
        return self._store.present

    def can_undo(self) -> bool:
        return self._store.can_undo

    def can_redo(self) -> bool:
        return self._store.can_redo

    def dispatch(self, command: Command) -> None:
        with self._lock:
            self._store = reduce(
                self._store,
                command,
                engine=self.engine,
                limit=self.config.history_limit,
            )
            store = self._store
            self._persist(store)

        # ticks arrive every second, keep them out of INFO
        if isinstance(command, TimerTick):
            self.logger.debug(f"{self.match_id} tick -> {store.present.time_seconds}s")
        else:
            self.logger.info(
                f"{self.match_id} {command.type}: "
                f"{store.present.home_total_score}-{store.present.away_total_score}, "
                f"Q{store.present.current_quarter} {store.present.time_seconds}s"
            )

    def hydrate(self, store: HistoryStore) -> None:
        """Replace the whole history, e.g. with one rebuilt from the league service."""
        with self._lock:
            self._store = store
            self._persist(store)
        self.logger.info(f"Hydrated {self.match_id} with {len(store.past)} undo steps")

    def clear_saved_state(self) -> None:
        with self._lock:
            self.repo.delete()

    def _persist(self, store: HistoryStore) -> None:
        try:
            self.repo.save(store)
        except Exception:
            self.logger.exception(f"Failed to save history for {self.match_id}")
