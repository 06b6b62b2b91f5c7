from scorebook.domain.commands import (
    AddTimeout,
    ChangeQuarter,
    Redo,
    TimerTick,
    ToggleTimer,
    Undo,
    UpdatePlayerStat,
)
from scorebook.domain.engine import MatchEngine
from scorebook.domain.history import HistoryStore, reduce


def test_initial_store_has_no_history(snapshot):
    store = HistoryStore.initial(snapshot)
    assert store.present is snapshot
    assert not store.can_undo
    assert not store.can_redo


def test_change_pushes_present_onto_past(snapshot):
    store = reduce(HistoryStore.initial(snapshot), ToggleTimer())
    assert store.past == (snapshot,)
    assert store.present.timer_running is True
    assert store.future == ()


def test_noop_records_nothing(snapshot):
    store = HistoryStore.initial(snapshot)
    assert reduce(store, UpdatePlayerStat("home", "ghost", "fg2m", 1)) is store
    assert reduce(store, ChangeQuarter(1)) is store


def test_undo_redo_round_trip(snapshot):
    store = HistoryStore.initial(snapshot)
    changed = reduce(store, UpdatePlayerStat("home", "h1", "fg3m", 1))

    undone = reduce(changed, Undo())
    assert undone.present == snapshot
    assert undone.can_redo

    redone = reduce(undone, Redo())
    assert redone.present == changed.present
    assert redone.past == changed.past
    assert not redone.can_redo


def test_undo_and_redo_with_empty_stacks_are_noops(snapshot):
    store = HistoryStore.initial(snapshot)
    assert reduce(store, Undo()) is store
    assert reduce(store, Redo()) is store


def test_undo_order_is_last_in_first_out(snapshot):
    store = HistoryStore.initial(snapshot)
    store = reduce(store, AddTimeout("home"))
    after_first = store.present
    store = reduce(store, AddTimeout("away"))
    after_second = store.present

    store = reduce(store, Undo())
    assert store.present == after_first
    store = reduce(store, Undo())
    assert store.present == snapshot
    assert store.future == (after_first, after_second)


def test_new_edit_invalidates_redo(snapshot):
    store = HistoryStore.initial(snapshot)
    store = reduce(store, UpdatePlayerStat("home", "h1", "fg2m", 1))
    store = reduce(store, Undo())
    assert store.can_redo

    store = reduce(store, UpdatePlayerStat("away", "a1", "ftm", 1))
    assert not store.can_redo
    assert reduce(store, Redo()) is store


def test_limit_evicts_oldest(snapshot):
    store = HistoryStore.initial(snapshot)
    store = reduce(store, ToggleTimer(), limit=3)
    for _ in range(5):
        store = reduce(store, TimerTick(), limit=3)

    assert len(store.past) == 3
    assert store.present.time_seconds == 595
    # the oldest kept entry is three steps back
    assert store.past[0].time_seconds == 598


def test_custom_engine_is_used(snapshot):
    store = HistoryStore.initial(snapshot)
    strict = MatchEngine(strict_team_ids=True)
    assert reduce(store, AddTimeout("nobody"), engine=strict) is store
    assert reduce(store, AddTimeout("nobody")).present.away_team.timeouts
