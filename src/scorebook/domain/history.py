from dataclasses import dataclass
from typing import Optional, Tuple

from scorebook.domain.commands import Command, Undo, Redo
from scorebook.domain.engine import MatchEngine, default_engine
from scorebook.domain.entities.match import MatchSnapshot


@dataclass(frozen=True)
class HistoryStore:
    """
    Linear undo/redo over whole snapshots.

    past:    previous snapshots, oldest first
    present: the live snapshot
    future:  undone snapshots, the next one to redo first
    """
    present: MatchSnapshot
    past: Tuple[MatchSnapshot, ...] = ()
    future: Tuple[MatchSnapshot, ...] = ()

    @classmethod
    def initial(cls, snapshot: MatchSnapshot) -> 'HistoryStore':
        return cls(present=snapshot)

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0


def reduce(
    store: HistoryStore,
    command: Command,
    engine: Optional[MatchEngine] = None,
    limit: Optional[int] = None,
) -> HistoryStore:
    """
    Apply one command to the store. Returns `store` itself when nothing changed.

    `limit` caps the number of snapshots kept in `past`; the oldest are dropped first.
    """
    if isinstance(command, Undo):
        if not store.past:
            return store
        return HistoryStore(
            past=store.past[:-1],
            present=store.past[-1],
            future=(store.present,) + store.future,
        )

    if isinstance(command, Redo):
        if not store.future:
            return store
        return HistoryStore(
            past=store.past + (store.present,),
            present=store.future[0],
            future=store.future[1:],
        )

    engine = engine or default_engine
    new_present = engine.apply(store.present, command)
    if new_present is store.present:
        return store

    past = store.past + (store.present,)
    if limit is not None and limit > 0 and len(past) > limit:
        past = past[len(past) - limit:]
    # a new edit invalidates everything that was undone
    return HistoryStore(past=past, present=new_present, future=())
