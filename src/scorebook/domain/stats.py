from typing import TYPE_CHECKING, Dict, Iterable

if TYPE_CHECKING:
    from scorebook.domain.entities.players import PlayerState, StatSummary

# Points credited per made shot
POINT_VALUES: Dict[str, int] = {
    'fg2m': 2,
    'fg3m': 3,
    'ftm': 1,
}


def score_player(summary: 'StatSummary') -> int:
    return summary.fg2m * 2 + summary.fg3m * 3 + summary.ftm


def score_team(players: Iterable['PlayerState']) -> int:
    return sum(score_player(p.summary) for p in players)
