from dataclasses import dataclass
from typing import Dict

from scorebook.domain.entities.teams import TeamState
from scorebook.domain.stats import score_team
from scorebook.constants import (
    DEFAULT_QUARTERS,
    DEFAULT_MINUTES_PER_QUARTER,
    DEFAULT_MINUTES_PER_OVERTIME,
)


@dataclass(frozen=True)
class MatchSnapshot:
    """
    One complete, immutable value of a live match.

    Example (trimmed):
    {
        'match_id': 'a3f0c2',
        'home_total_score': 41,
        'away_total_score': 38,
        'quarters': 4,
        'minutes_per_quarter': 10,
        'minutes_per_overtime': 5,
        'overtime_periods': 0,
        'time_seconds': 312,
        'timer_running': False,
        'current_quarter': 3,
        'is_overtime': False,
        'home_team': {...},
        'away_team': {...}
    }
    """
    match_id: str
    home_team: TeamState
    away_team: TeamState
    time_seconds: int = DEFAULT_MINUTES_PER_QUARTER * 60
    timer_running: bool = False
    current_quarter: int = 1
    is_overtime: bool = False
    quarters: int = DEFAULT_QUARTERS
    minutes_per_quarter: int = DEFAULT_MINUTES_PER_QUARTER
    minutes_per_overtime: int = DEFAULT_MINUTES_PER_OVERTIME
    overtime_periods: int = 0
    home_total_score: int = 0
    away_total_score: int = 0

    @property
    def last_period(self) -> int:
        return self.quarters + self.overtime_periods

    def period_seconds(self, quarter: int) -> int:
        """Full clock for `quarter`: regulation length, or overtime length past regulation."""
        if quarter > self.quarters:
            return self.minutes_per_overtime * 60
        return self.minutes_per_quarter * 60

    def to_dict(self) -> Dict:
        return {
            'match_id': self.match_id,
            'home_total_score': self.home_total_score,
            'away_total_score': self.away_total_score,
            'quarters': self.quarters,
            'minutes_per_quarter': self.minutes_per_quarter,
            'minutes_per_overtime': self.minutes_per_overtime,
            'overtime_periods': self.overtime_periods,
            'time_seconds': self.time_seconds,
            'timer_running': self.timer_running,
            'current_quarter': self.current_quarter,
            'is_overtime': self.is_overtime,
            'home_team': self.home_team.to_dict(),
            'away_team': self.away_team.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'MatchSnapshot':
        # side totals are rebuilt from the players, never trusted from storage
        home_team = TeamState.from_dict(data['home_team'])
        away_team = TeamState.from_dict(data['away_team'])
        return cls(
            match_id=str(data['match_id']),
            home_team=home_team,
            away_team=away_team,
            time_seconds=max(0, int(data.get('time_seconds', 0))),
            timer_running=bool(data.get('timer_running', False)),
            current_quarter=max(1, int(data.get('current_quarter', 1))),
            is_overtime=bool(data.get('is_overtime', False)),
            quarters=int(data.get('quarters', DEFAULT_QUARTERS)),
            minutes_per_quarter=int(data.get('minutes_per_quarter', DEFAULT_MINUTES_PER_QUARTER)),
            minutes_per_overtime=int(data.get('minutes_per_overtime') or DEFAULT_MINUTES_PER_OVERTIME),
            overtime_periods=int(data.get('overtime_periods', 0)),
            home_total_score=score_team(home_team.players),
            away_total_score=score_team(away_team.players),
        )
