from typing import List, Optional

from pydantic import BaseModel, Field

from scorebook.constants import (
    AWAY_SIDE,
    HOME_SIDE,
    STARTERS_PER_TEAM,
    DEFAULT_QUARTERS,
    DEFAULT_MINUTES_PER_QUARTER,
    DEFAULT_MINUTES_PER_OVERTIME,
)
from scorebook.domain.entities.match import MatchSnapshot
from scorebook.domain.entities.players import PlayerState
from scorebook.domain.entities.quarters import QuarterFoul, QuarterScore
from scorebook.domain.entities.teams import TeamState
from scorebook.domain.history import HistoryStore


class LeaguePlayerPayload(BaseModel):
    player_id: str
    full_name: str = ''
    jersey_name: str = ''
    jersey_number: int = 0


class LeagueTeamPayload(BaseModel):
    team_id: str
    team_name: str
    coach_name: Optional[str] = None
    league_players: List[LeaguePlayerPayload] = []


class LeagueMatchPayload(BaseModel):
    """
    The league match as the league service returns it, trimmed to what
    a scorebook needs to start.
    """
    league_match_id: str
    quarters: int = Field(default=DEFAULT_QUARTERS, ge=1)
    minutes_per_quarter: int = Field(default=DEFAULT_MINUTES_PER_QUARTER, ge=1)
    minutes_per_overtime: int = Field(default=DEFAULT_MINUTES_PER_OVERTIME, ge=1)
    home_team: LeagueTeamPayload
    away_team: LeagueTeamPayload


def _build_team(team: LeagueTeamPayload, side: str) -> TeamState:
    players = tuple(
        PlayerState(
            player_id=p.player_id,
            full_name=p.full_name,
            jersey_name=p.jersey_name,
            jersey_number=p.jersey_number,
            # first five listed start on the floor
            on_bench=i >= STARTERS_PER_TEAM,
        )
        for i, p in enumerate(team.league_players)
    )
    return TeamState(
        team_id=team.team_id,
        team_name=team.team_name,
        coach=team.coach_name or '',
        side=side,
        score_per_qtr=(QuarterScore(1, 0),),
        teamF_per_qtr=(QuarterFoul(1, 0),),
        players=players,
    )


def build_initial_snapshot(payload: LeagueMatchPayload) -> MatchSnapshot:
    return MatchSnapshot(
        match_id=payload.league_match_id,
        home_team=_build_team(payload.home_team, HOME_SIDE),
        away_team=_build_team(payload.away_team, AWAY_SIDE),
        time_seconds=payload.minutes_per_quarter * 60,
        timer_running=False,
        current_quarter=1,
        is_overtime=False,
        quarters=payload.quarters,
        minutes_per_quarter=payload.minutes_per_quarter,
        minutes_per_overtime=payload.minutes_per_overtime,
    )


def build_initial_history(payload: LeagueMatchPayload) -> HistoryStore:
    return HistoryStore.initial(build_initial_snapshot(payload))
