from dataclasses import replace
from typing import Optional
import logging

from scorebook.constants import HOME_SIDE, AWAY_SIDE
from scorebook.domain.commands import (
    Command,
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
)
from scorebook.domain.entities.match import MatchSnapshot
from scorebook.domain.entities.teams import TeamState
from scorebook.domain.entities.quarters import (
    QuarterFoul,
    QuarterScore,
    TimeoutRecord,
    ensure_quarter,
    find_quarter,
    upsert_quarter,
)
from scorebook.domain.stats import POINT_VALUES, score_player, score_team

logger = logging.getLogger(__name__)

# 'P' / 'T' on the wire
FOUL_ATTRS = {
    'P': 'personal_fouls',
    'T': 'technical_fouls',
}

TEAM_STAT_ATTRS = {
    'coachT': 'coach_t',
    'none_memberT': 'none_member_t',
}


def format_clock(seconds: int) -> str:
    """Render remaining seconds as zero padded mm:ss."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class MatchEngine:
    """
    Pure transition function over MatchSnapshot values.

    `apply` never raises for bad payloads: an unknown player, an out of range
    timeout index or an unchanged value all return the input snapshot object
    itself, which is how the history store tells a no-op from a change.
    """

    def __init__(self, strict_team_ids: bool = False):
        # When set, a team_id matching neither side is ignored instead of
        # being routed to the away team.
        self.strict_team_ids = strict_team_ids

    # ------------------------------------------------------------------
    # APPLY: routes each command to its transition
    # ------------------------------------------------------------------

    def apply(self, snapshot: MatchSnapshot, command: Command) -> MatchSnapshot:
        if isinstance(command, ToggleTimer):
            result = replace(snapshot, timer_running=not snapshot.timer_running)
        elif isinstance(command, SetTime):
            result = self._apply_set_time(snapshot, command)
        elif isinstance(command, TimerTick):
            result = self._apply_timer_tick(snapshot)
        elif isinstance(command, ChangeQuarter):
            result = self._apply_change_quarter(snapshot, command)
        elif isinstance(command, AddOvertime):
            result = self._apply_add_overtime(snapshot)
        elif isinstance(command, UpdateTeamStat):
            result = self._apply_update_team_stat(snapshot, command)
        elif isinstance(command, AddTimeout):
            result = self._apply_add_timeout(snapshot, command)
        elif isinstance(command, RemoveTimeout):
            result = self._apply_remove_timeout(snapshot, command)
        elif isinstance(command, UpdatePlayerStat):
            result = self._apply_update_player_stat(snapshot, command)
        elif isinstance(command, SetPlayerStat):
            result = self._apply_set_player_stat(snapshot, command)
        elif isinstance(command, SubstitutePlayer):
            result = self._apply_substitute_player(snapshot, command)
        else:
            # Undo / Redo belong to the history store
            logger.debug(f"Engine ignoring command {type(command).__name__}")
            return snapshot

        if result is snapshot or result == snapshot:
            return snapshot
        return result

    # ------------------------------------------------------------------
    # Clock and periods
    # ------------------------------------------------------------------

    def _apply_set_time(self, snapshot: MatchSnapshot, command: SetTime) -> MatchSnapshot:
        seconds = max(0, int(command.seconds))
        running = snapshot.timer_running and seconds > 0
        return replace(snapshot, time_seconds=seconds, timer_running=running)

    def _apply_timer_tick(self, snapshot: MatchSnapshot) -> MatchSnapshot:
        if snapshot.time_seconds > 0:
            remaining = snapshot.time_seconds - 1
            return replace(
                snapshot,
                time_seconds=remaining,
                timer_running=snapshot.timer_running and remaining > 0,
            )
        return replace(snapshot, timer_running=False)

    def _apply_change_quarter(self, snapshot: MatchSnapshot, command: ChangeQuarter) -> MatchSnapshot:
        quarter = command.quarter
        if quarter == snapshot.current_quarter:
            return snapshot
        if quarter < 1 or quarter > snapshot.last_period:
            logger.debug(f"Ignoring quarter {quarter}, periods are 1..{snapshot.last_period}")
            return snapshot

        return replace(
            snapshot,
            current_quarter=quarter,
            is_overtime=quarter > snapshot.quarters,
            timer_running=False,
            time_seconds=snapshot.period_seconds(quarter),
            home_team=self._prepare_quarter(snapshot.home_team, quarter),
            away_team=self._prepare_quarter(snapshot.away_team, quarter),
        )

    def _apply_add_overtime(self, snapshot: MatchSnapshot) -> MatchSnapshot:
        overtime_periods = snapshot.overtime_periods + 1
        quarter = snapshot.quarters + overtime_periods
        return replace(
            snapshot,
            overtime_periods=overtime_periods,
            current_quarter=quarter,
            is_overtime=True,
            timer_running=False,
            time_seconds=snapshot.minutes_per_overtime * 60,
            home_team=self._prepare_quarter(snapshot.home_team, quarter),
            away_team=self._prepare_quarter(snapshot.away_team, quarter),
        )

    @staticmethod
    def _prepare_quarter(team: TeamState, quarter: int) -> TeamState:
        """Make sure the team has score and foul rows for `quarter`."""
        return replace(
            team,
            score_per_qtr=ensure_quarter(team.score_per_qtr, QuarterScore(quarter, 0)),
            teamF_per_qtr=ensure_quarter(team.teamF_per_qtr, QuarterFoul(quarter, 0)),
        )

    # ------------------------------------------------------------------
    # Team level
    # ------------------------------------------------------------------

    def _apply_update_team_stat(self, snapshot: MatchSnapshot, command: UpdateTeamStat) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        value = max(0, int(command.value))

        if command.stat == 'teamFoul':
            quarter = snapshot.current_quarter if command.quarter is None else command.quarter
            if quarter < 1:
                return snapshot
            team = replace(team, teamF_per_qtr=upsert_quarter(team.teamF_per_qtr, QuarterFoul(quarter, value)))
        else:
            team = replace(team, **{TEAM_STAT_ATTRS[command.stat]: value})

        return self._with_team(snapshot, side, team)

    def _apply_add_timeout(self, snapshot: MatchSnapshot, command: AddTimeout) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        record = TimeoutRecord(
            quarter=snapshot.current_quarter,
            clock_display=format_clock(snapshot.time_seconds),
        )
        team = replace(team, timeouts=team.timeouts + (record,))
        return self._with_team(snapshot, side, team, timer_running=False)

    def _apply_remove_timeout(self, snapshot: MatchSnapshot, command: RemoveTimeout) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        index = command.index
        if not 0 <= index < len(team.timeouts):
            return snapshot
        team = replace(team, timeouts=team.timeouts[:index] + team.timeouts[index + 1:])
        return self._with_team(snapshot, side, team)

    # ------------------------------------------------------------------
    # Player level
    # ------------------------------------------------------------------

    def _apply_update_player_stat(self, snapshot: MatchSnapshot, command: UpdatePlayerStat) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        index = team.player_index(command.player_id)
        if index is None:
            return snapshot

        player = team.players[index]
        changes = {}
        if command.stat in FOUL_ATTRS:
            attr = FOUL_ATTRS[command.stat]
            player = replace(player, **{attr: max(0, getattr(player, attr) + command.delta)})
            # a whistle stops the clock
            if command.delta > 0:
                changes['timer_running'] = False
        else:
            old_value = getattr(player.summary, command.stat)
            new_value = max(0, old_value + command.delta)
            summary = replace(player.summary, **{command.stat: new_value})

            # credit the points actually applied to the current quarter
            points = POINT_VALUES.get(command.stat, 0) * (new_value - old_value)
            score_per_qtr = player.score_per_qtr
            if points:
                quarter = snapshot.current_quarter
                current = find_quarter(score_per_qtr, quarter)
                base = current.score if current else 0
                score_per_qtr = upsert_quarter(score_per_qtr, QuarterScore(quarter, max(0, base + points)))

            player = replace(
                player,
                summary=summary,
                score_per_qtr=score_per_qtr,
                total_score=score_player(summary),
            )

        team = team.with_player(index, player)
        team = self._recalculate_quarter_score(team, snapshot.current_quarter)
        return self._with_team(snapshot, side, team, **changes)

    def _apply_set_player_stat(self, snapshot: MatchSnapshot, command: SetPlayerStat) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        index = team.player_index(command.player_id)
        if index is None:
            return snapshot

        player = replace(team.players[index], **{FOUL_ATTRS[command.stat]: max(0, int(command.value))})
        return self._with_team(snapshot, side, team.with_player(index, player))

    def _apply_substitute_player(self, snapshot: MatchSnapshot, command: SubstitutePlayer) -> MatchSnapshot:
        side = self._resolve_side(snapshot, command.team_id)
        if side is None:
            return snapshot
        team = self._team(snapshot, side)
        incoming = team.player_index(command.on_court_player_id)
        outgoing = team.player_index(command.bench_player_id)
        if incoming is None or outgoing is None:
            return snapshot

        team = team.with_player(incoming, replace(team.players[incoming], on_bench=False))
        team = team.with_player(outgoing, replace(team.players[outgoing], on_bench=True))
        return self._with_team(snapshot, side, team, timer_running=False)

    @staticmethod
    def _recalculate_quarter_score(team: TeamState, quarter: int) -> TeamState:
        """
        Team's score for `quarter` is the sum of its players' scores in that quarter.
        An existing row is overwritten; a new row is only added once points exist.
        """
        quarter_total = 0
        for player in team.players:
            record = find_quarter(player.score_per_qtr, quarter)
            if record:
                quarter_total += record.score

        if find_quarter(team.score_per_qtr, quarter) is None and quarter_total <= 0:
            return team
        return replace(team, score_per_qtr=upsert_quarter(team.score_per_qtr, QuarterScore(quarter, quarter_total)))

    # ------------------------------------------------------------------
    # Side resolution
    # ------------------------------------------------------------------

    def _resolve_side(self, snapshot: MatchSnapshot, team_id: str) -> Optional[str]:
        if team_id == snapshot.home_team.team_id:
            return HOME_SIDE
        if self.strict_team_ids and team_id != snapshot.away_team.team_id:
            logger.warning(f"Unknown team_id {team_id!r} for match {snapshot.match_id}, ignoring")
            return None
        return AWAY_SIDE

    @staticmethod
    def _team(snapshot: MatchSnapshot, side: str) -> TeamState:
        return snapshot.home_team if side == HOME_SIDE else snapshot.away_team

    @staticmethod
    def _with_team(snapshot: MatchSnapshot, side: str, team: TeamState, **changes) -> MatchSnapshot:
        """Swap in a team and recompute that side's total."""
        if side == HOME_SIDE:
            return replace(snapshot, home_team=team, home_total_score=score_team(team.players), **changes)
        return replace(snapshot, away_team=team, away_total_score=score_team(team.players), **changes)


default_engine = MatchEngine()


def apply(snapshot: MatchSnapshot, command: Command) -> MatchSnapshot:
    return default_engine.apply(snapshot, command)
