# tests/scorebook_tests/conftest.py

import pytest

from scorebook.domain.history import HistoryStore
from scorebook.infra.db import create_session_factory
from scorebook.infra.repo.side_channel.memory import InMemoryKeyValueStore
from scorebook.infra.seed import LeagueMatchPayload, build_initial_snapshot
from scorebook.services.session import ScoringSession


@pytest.fixture
def match_payload():
    """
    A league match as the league service would return it:
    six players a side, so one starts on the bench.
    """
    def roster(prefix: str):
        return [
            {
                "player_id": f"{prefix}{i}",
                "full_name": f"Player {prefix.upper()}{i}",
                "jersey_name": f"{prefix.upper()}{i}",
                "jersey_number": i,
            }
            for i in range(1, 7)
        ]

    return {
        "league_match_id": "match-1",
        "quarters": 4,
        "minutes_per_quarter": 10,
        "minutes_per_overtime": 5,
        "home_team": {
            "team_id": "home",
            "team_name": "Mock Home Team",
            "coach_name": "Coach Home",
            "league_players": roster("h"),
        },
        "away_team": {
            "team_id": "away",
            "team_name": "Mock Away Team",
            "coach_name": "Coach Away",
            "league_players": roster("a"),
        },
    }


@pytest.fixture
def snapshot(match_payload):
    return build_initial_snapshot(LeagueMatchPayload.model_validate(match_payload))


@pytest.fixture
def side_channel():
    return InMemoryKeyValueStore()


@pytest.fixture
def session(snapshot, side_channel):
    return ScoringSession(
        match_id=snapshot.match_id,
        default_store=HistoryStore.initial(snapshot),
        side_channel=side_channel,
    )


# ======================================
# SQL side-channel
# ======================================
@pytest.fixture
def session_factory():
    """
    In-memory SQLite with the side-channel table created.
    SQLAlchemy hands every Session the same connection for ':memory:',
    so rows survive across sessions within a test.
    """
    return create_session_factory("sqlite://")
