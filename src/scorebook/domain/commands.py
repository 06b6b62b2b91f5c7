from dataclasses import dataclass, asdict, fields
from typing import ClassVar, Dict, Optional, Type

from scorebook.domain.entities.players import SUMMARY_STATS

TEAM_STATS = ('teamFoul', 'coachT', 'none_memberT')
FOUL_STATS = ('P', 'T')
PLAYER_STATS = SUMMARY_STATS + FOUL_STATS


class InvalidCommandError(ValueError):
    """Raised when a command cannot be built from its payload."""


def _matches(expected, value) -> bool:
    # JSON true/false are not counts
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == Optional[int]:
        return value is None or _matches(int, value)
    return isinstance(value, expected)


@dataclass(frozen=True)
class Command:
    """
    Base class for every mutation a scorebook accepts.
    Field values must match their annotations, so a command that was built
    is always safe to hand to the engine.
    """
    type: ClassVar[str] = ''

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not _matches(f.type, value):
                raise InvalidCommandError(
                    f"{self.type}.{f.name} expects {getattr(f.type, '__name__', f.type)}, got {value!r}"
                )


@dataclass(frozen=True)
class ToggleTimer(Command):
    type: ClassVar[str] = 'TOGGLE_TIMER'


@dataclass(frozen=True)
class SetTime(Command):
    type: ClassVar[str] = 'SET_TIME'
    seconds: int


@dataclass(frozen=True)
class TimerTick(Command):
    type: ClassVar[str] = 'TIMER_TICK'


@dataclass(frozen=True)
class ChangeQuarter(Command):
    type: ClassVar[str] = 'CHANGE_QUARTER'
    quarter: int


@dataclass(frozen=True)
class AddOvertime(Command):
    type: ClassVar[str] = 'ADD_OVERTIME'


@dataclass(frozen=True)
class UpdateTeamStat(Command):
    """
    'teamFoul' upserts the foul count for `quarter` (current quarter when omitted).
    'coachT' / 'none_memberT' overwrite the team's technical counters.
    """
    type: ClassVar[str] = 'UPDATE_TEAM_STAT'
    team_id: str
    stat: str
    value: int
    quarter: Optional[int] = None

    def __post_init__(self):
        super().__post_init__()
        if self.stat not in TEAM_STATS:
            raise InvalidCommandError(f"Unknown team stat: {self.stat}")


@dataclass(frozen=True)
class AddTimeout(Command):
    type: ClassVar[str] = 'ADD_TIMEOUT'
    team_id: str


@dataclass(frozen=True)
class RemoveTimeout(Command):
    type: ClassVar[str] = 'REMOVE_TIMEOUT'
    team_id: str
    index: int


@dataclass(frozen=True)
class UpdatePlayerStat(Command):
    """Add `delta` to one of the player's counters (summary field, 'P' or 'T')."""
    type: ClassVar[str] = 'UPDATE_PLAYER_STAT'
    team_id: str
    player_id: str
    stat: str
    delta: int

    def __post_init__(self):
        super().__post_init__()
        if self.stat not in PLAYER_STATS:
            raise InvalidCommandError(f"Unknown player stat: {self.stat}")


@dataclass(frozen=True)
class SetPlayerStat(Command):
    """Overwrite a player's foul counter ('P' or 'T')."""
    type: ClassVar[str] = 'SET_PLAYER_STAT'
    team_id: str
    player_id: str
    stat: str
    value: int

    def __post_init__(self):
        super().__post_init__()
        if self.stat not in FOUL_STATS:
            raise InvalidCommandError(f"Only fouls can be set directly, got: {self.stat}")


@dataclass(frozen=True)
class SubstitutePlayer(Command):
    type: ClassVar[str] = 'SUBSTITUTE_PLAYER'
    team_id: str
    on_court_player_id: str  # comes off the bench
    bench_player_id: str  # goes to the bench


@dataclass(frozen=True)
class Undo(Command):
    type: ClassVar[str] = 'UNDO'


@dataclass(frozen=True)
class Redo(Command):
    type: ClassVar[str] = 'REDO'


COMMAND_TYPES: Dict[str, Type[Command]] = {
    cls.type: cls
    for cls in (
        ToggleTimer,
        SetTime,
        TimerTick,
        ChangeQuarter,
        AddOvertime,
        UpdateTeamStat,
        AddTimeout,
        RemoveTimeout,
        UpdatePlayerStat,
        SetPlayerStat,
        SubstitutePlayer,
        Undo,
        Redo,
    )
}


def command_to_dict(command: Command) -> Dict:
    """Wire shape: {'type': 'ADD_TIMEOUT', 'payload': {'team_id': 't1'}}"""
    return {'type': command.type, 'payload': asdict(command)}


def command_from_dict(data: Dict) -> Command:
    try:
        cls = COMMAND_TYPES[data['type']]
    except (KeyError, TypeError):
        raise InvalidCommandError(f"Unknown command: {data!r}")

    payload = data.get('payload') or {}
    if not isinstance(payload, dict):
        raise InvalidCommandError(f"Payload for {cls.type} must be an object, got {payload!r}")
    allowed = {f.name for f in fields(cls)}
    unexpected = set(payload) - allowed
    if unexpected:
        raise InvalidCommandError(f"Unexpected fields for {cls.type}: {sorted(unexpected)}")
    try:
        return cls(**payload)
    except TypeError as e:
        raise InvalidCommandError(f"Bad payload for {cls.type}: {e}") from e
