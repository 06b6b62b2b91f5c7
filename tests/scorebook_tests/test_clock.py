import asyncio
from dataclasses import replace

import pytest

from scorebook.config.config import ScorebookConfig
from scorebook.domain.commands import ToggleTimer
from scorebook.domain.history import HistoryStore
from scorebook.infra.repo.side_channel.memory import InMemoryKeyValueStore
from scorebook.services.clock import GameClock
from scorebook.services.session import ScoringSession


@pytest.fixture
def short_session(snapshot):
    state = replace(snapshot, time_seconds=3)
    return ScoringSession(state.match_id, HistoryStore.initial(state), InMemoryKeyValueStore())


def test_tick_once_only_while_running(short_session):
    clock = GameClock(short_session, interval=0)
    assert clock.tick_once() is False
    assert short_session.current_snapshot().time_seconds == 3

    short_session.dispatch(ToggleTimer())
    assert clock.tick_once() is True
    assert short_session.current_snapshot().time_seconds == 2


@pytest.mark.asyncio
async def test_run_counts_down_and_stops_at_zero(short_session):
    clock = GameClock(short_session, interval=0.01)
    short_session.dispatch(ToggleTimer())

    task = asyncio.create_task(clock.run())
    for _ in range(200):
        if not short_session.current_snapshot().timer_running:
            break
        await asyncio.sleep(0.01)
    clock.stop()
    await asyncio.wait_for(task, timeout=1)

    present = short_session.current_snapshot()
    assert present.time_seconds == 0
    assert present.timer_running is False
    # three ticks after the toggle, nothing after the clock stopped
    assert len(short_session.history.past) == 4


def test_interval_comes_from_session_config(snapshot):
    config = ScorebookConfig(tick_interval=0.25)
    session = ScoringSession(snapshot.match_id, HistoryStore.initial(snapshot), InMemoryKeyValueStore(), config=config)
    assert GameClock(session).interval == 0.25
    # explicit interval wins
    assert GameClock(session, interval=2).interval == 2


def test_default_interval_is_one_second(short_session):
    assert GameClock(short_session).interval == 1.0
