import pytest

from scorebook.config.config import ScorebookConfig
from scorebook.domain.commands import UpdatePlayerStat
from scorebook.services.finalize import MatchSubmitter, finalize_match


class RecordingSubmitter(MatchSubmitter):
    def __init__(self):
        self.submitted = []

    def submit(self, snapshot):
        self.submitted.append(snapshot)


class RejectingSubmitter(MatchSubmitter):
    def submit(self, snapshot):
        raise ConnectionError("league service unavailable")


def test_finalize_submits_and_clears(session, side_channel):
    session.dispatch(UpdatePlayerStat("away", "a1", "fg2m", 1))
    submitter = RecordingSubmitter()

    result = finalize_match(session, submitter)

    assert submitter.submitted == [result]
    assert result.away_total_score == 2
    assert side_channel.get(ScorebookConfig().state_key) is None


def test_failed_submit_keeps_saved_state(session, side_channel):
    session.dispatch(UpdatePlayerStat("away", "a1", "fg2m", 1))
    with pytest.raises(ConnectionError):
        finalize_match(session, RejectingSubmitter())
    assert side_channel.get(ScorebookConfig().state_key) is not None
