import pytest
from pydantic import ValidationError

from scorebook.infra.seed import LeagueMatchPayload, build_initial_history, build_initial_snapshot


def test_initial_snapshot(match_payload):
    snapshot = build_initial_snapshot(LeagueMatchPayload.model_validate(match_payload))

    assert snapshot.match_id == "match-1"
    assert snapshot.time_seconds == 600
    assert snapshot.timer_running is False
    assert snapshot.current_quarter == 1
    assert snapshot.home_total_score == snapshot.away_total_score == 0
    assert snapshot.home_team.side == "home"
    assert snapshot.away_team.side == "away"
    assert snapshot.home_team.coach == "Coach Home"
    assert [s.to_dict() for s in snapshot.home_team.score_per_qtr] == [{"qtr": 1, "score": 0}]


def test_first_five_start(match_payload):
    snapshot = build_initial_snapshot(LeagueMatchPayload.model_validate(match_payload))
    bench = [p.player_id for p in snapshot.away_team.players if p.on_bench]
    assert bench == ["a6"]
    assert len(snapshot.away_team.on_court()) == 5


def test_initial_history_is_empty(match_payload):
    store = build_initial_history(LeagueMatchPayload.model_validate(match_payload))
    assert store.past == () and store.future == ()


def test_missing_coach_is_blank(match_payload):
    match_payload["home_team"]["coach_name"] = None
    snapshot = build_initial_snapshot(LeagueMatchPayload.model_validate(match_payload))
    assert snapshot.home_team.coach == ""


def test_invalid_payload_raises(match_payload):
    match_payload["minutes_per_quarter"] = 0
    with pytest.raises(ValidationError):
        LeagueMatchPayload.model_validate(match_payload)
