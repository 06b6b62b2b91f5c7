from dataclasses import dataclass, field, fields
from typing import Dict, Tuple

from scorebook.domain.entities.quarters import QuarterScore
from scorebook.domain.stats import score_player


@dataclass(frozen=True)
class StatSummary:
    """
    Made/attempted shot counts plus the counting stats kept on the scorebook.

    Example:
    {
        'fg2m': 3, 'fg2a': 7,
        'fg3m': 1, 'fg3a': 4,
        'ftm': 2, 'fta': 2,
        'reb': 5, 'ast': 2, 'stl': 1, 'blk': 0, 'tov': 3
    }
    """
    fg2m: int = 0  # 2-point field goals made
    fg2a: int = 0  # 2-point field goals attempted
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0  # free throws made
    fta: int = 0  # free throws attempted
    reb: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    tov: int = 0

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in self.field_names()}

    @classmethod
    def from_dict(cls, data: Dict) -> 'StatSummary':
        return cls(**{name: int(data.get(name, 0)) for name in cls.field_names()})


SUMMARY_STATS = StatSummary.field_names()


@dataclass(frozen=True)
class PlayerState:
    """
    One player's line on the scorebook.
    `total_score` is derived from `summary` by the engine and never set by callers.
    """
    player_id: str
    jersey_name: str = ''
    jersey_number: int = 0
    full_name: str = ''
    on_bench: bool = False
    personal_fouls: int = 0  # 'P'
    technical_fouls: int = 0  # 'T'
    summary: StatSummary = field(default_factory=StatSummary)
    score_per_qtr: Tuple[QuarterScore, ...] = ()
    total_score: int = 0

    def to_dict(self) -> Dict:
        return {
            'player_id': self.player_id,
            'full_name': self.full_name,
            'jersey_name': self.jersey_name,
            'jersey_number': self.jersey_number,
            'total_score': self.total_score,
            'score_per_qtr': [s.to_dict() for s in self.score_per_qtr],
            'P': self.personal_fouls,
            'T': self.technical_fouls,
            'summary': self.summary.to_dict(),
            'onBench': self.on_bench,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'PlayerState':
        """Stored total_score is ignored, it is always derived from the summary."""
        summary = StatSummary.from_dict(data.get('summary') or {})
        return cls(
            player_id=str(data['player_id']),
            full_name=data.get('full_name', ''),
            jersey_name=data.get('jersey_name', ''),
            jersey_number=int(data.get('jersey_number') or 0),
            on_bench=bool(data.get('onBench', False)),
            personal_fouls=int(data.get('P', 0)),
            technical_fouls=int(data.get('T', 0)),
            summary=summary,
            score_per_qtr=tuple(QuarterScore.from_dict(s) for s in data.get('score_per_qtr') or []),
            total_score=score_player(summary),
        )
