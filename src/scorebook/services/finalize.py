from abc import ABC, abstractmethod

from scorebook.domain.entities.match import MatchSnapshot
from scorebook.services.session import ScoringSession


class MatchSubmitter(ABC):
    """Hands a finished scorebook to the league service."""
    @abstractmethod
    def submit(self, snapshot: MatchSnapshot) -> None:
        pass


def finalize_match(session: ScoringSession, submitter: MatchSubmitter) -> MatchSnapshot:
    """
    Submit the current snapshot, then drop the saved history.
    If submit raises, the saved history is left alone so the game can be retried.
    """
    snapshot = session.current_snapshot()
    submitter.submit(snapshot)
    session.clear_saved_state()
    session.logger.info(
        f"Finalized {snapshot.match_id}: "
        f"{snapshot.home_team.team_name} {snapshot.home_total_score} - "
        f"{snapshot.away_total_score} {snapshot.away_team.team_name}"
    )
    return snapshot
