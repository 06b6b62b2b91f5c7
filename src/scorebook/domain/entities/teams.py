from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from scorebook.domain.entities.players import PlayerState
from scorebook.domain.entities.quarters import QuarterFoul, QuarterScore, TimeoutRecord


@dataclass(frozen=True)
class TeamState:
    """
    One side of the scorebook.

    `coach_t` / `none_member_t` serialize as 'coachT' / 'none_memberT'
    (coach and bench technical fouls).
    """
    team_id: str
    team_name: str = ''
    coach: str = ''
    side: str = 'home'
    coach_t: int = 0
    none_member_t: int = 0
    score_per_qtr: Tuple[QuarterScore, ...] = ()
    teamF_per_qtr: Tuple[QuarterFoul, ...] = ()
    timeouts: Tuple[TimeoutRecord, ...] = ()
    players: Tuple[PlayerState, ...] = ()

    def player_index(self, player_id: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.player_id == player_id:
                return i
        return None

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        index = self.player_index(player_id)
        return None if index is None else self.players[index]

    def with_player(self, index: int, player: PlayerState) -> 'TeamState':
        """Return a copy of the team with the player at `index` swapped out."""
        players = self.players[:index] + (player,) + self.players[index + 1:]
        return replace(self, players=players)

    def on_court(self) -> Tuple[PlayerState, ...]:
        return tuple(p for p in self.players if not p.on_bench)

    def to_dict(self) -> Dict:
        return {
            'side': self.side,
            'team_id': self.team_id,
            'team_name': self.team_name,
            'coach': self.coach,
            'coachT': self.coach_t,
            'none_memberT': self.none_member_t,
            'score_per_qtr': [s.to_dict() for s in self.score_per_qtr],
            'teamF_per_qtr': [f.to_dict() for f in self.teamF_per_qtr],
            'timeouts': [t.to_dict() for t in self.timeouts],
            'players': [p.to_dict() for p in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TeamState':
        return cls(
            team_id=str(data['team_id']),
            team_name=data.get('team_name', ''),
            coach=data.get('coach') or '',
            side=data.get('side', 'home'),
            coach_t=int(data.get('coachT', 0)),
            none_member_t=int(data.get('none_memberT', 0)),
            score_per_qtr=tuple(QuarterScore.from_dict(s) for s in data.get('score_per_qtr') or []),
            teamF_per_qtr=tuple(QuarterFoul.from_dict(f) for f in data.get('teamF_per_qtr') or []),
            timeouts=tuple(TimeoutRecord.from_dict(t) for t in data.get('timeouts') or []),
            players=tuple(PlayerState.from_dict(p) for p in data.get('players') or []),
        )
