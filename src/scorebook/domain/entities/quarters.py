from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TypeVar


@dataclass(frozen=True)
class QuarterScore:
    quarter: int
    score: int = 0

    def to_dict(self) -> Dict:
        return {'qtr': self.quarter, 'score': self.score}

    @classmethod
    def from_dict(cls, data: Dict) -> 'QuarterScore':
        return cls(quarter=int(data['qtr']), score=int(data.get('score', 0)))


@dataclass(frozen=True)
class QuarterFoul:
    quarter: int
    foul: int = 0

    def to_dict(self) -> Dict:
        return {'qtr': self.quarter, 'foul': self.foul}

    @classmethod
    def from_dict(cls, data: Dict) -> 'QuarterFoul':
        return cls(quarter=int(data['qtr']), foul=int(data.get('foul', 0)))


@dataclass(frozen=True)
class TimeoutRecord:
    """A timeout called by a team: the period it was called in and the clock as shown."""
    quarter: int
    clock_display: str

    def to_dict(self) -> Dict:
        return {'qtr': self.quarter, 'game_time': self.clock_display}

    @classmethod
    def from_dict(cls, data: Dict) -> 'TimeoutRecord':
        return cls(quarter=int(data['qtr']), clock_display=str(data['game_time']))


R = TypeVar('R', QuarterScore, QuarterFoul)


def find_quarter(records: Tuple[R, ...], quarter: int) -> Optional[R]:
    for record in records:
        if record.quarter == quarter:
            return record
    return None


def upsert_quarter(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    """
    Replace the entry for `record.quarter` in place, or append it.
    Keeps at most one entry per quarter number.
    """
    if find_quarter(records, record.quarter) is None:
        return records + (record,)
    return tuple(record if r.quarter == record.quarter else r for r in records)


def ensure_quarter(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    """Append `record` only when its quarter has no entry yet."""
    if find_quarter(records, record.quarter) is None:
        return records + (record,)
    return records
