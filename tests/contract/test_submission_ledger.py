"""Tests for the submission ledger."""

import pytest

from corrindex.contract.models import CallContext, Submission, Verification
from corrindex.contract.results import ErrorCode
from corrindex.contract.submissions import SubmissionLedger, check_country, check_scores


def _ctx(caller: str = "ST1TEST", block: int = 0) -> CallContext:
    return CallContext(caller=caller, block_height=block)


@pytest.fixture
def ledger():
    return SubmissionLedger()


class TestValidation:

    @pytest.mark.parametrize("country", ["U", "US", "USA"])
    def test_valid_countries(self, country):
        assert check_country(country) is None

    @pytest.mark.parametrize("country", ["", "USAA", None, 123])
    def test_invalid_countries(self, country):
        assert check_country(country) is ErrorCode.INVALID_COUNTRY

    def test_scores_bounds(self):
        assert check_scores(0, 50, 100) is None
        assert check_scores(101, 0, 0) is ErrorCode.INVALID_SCORE
        assert check_scores(0, -1, 0) is ErrorCode.INVALID_SCORE
        assert check_scores(0, 0, 99.5) is ErrorCode.INVALID_SCORE
        assert check_scores(True, 0, 0) is ErrorCode.INVALID_SCORE


class TestSubmitData:

    def test_records_submission_and_verification(self, ledger):
        result = ledger.submit_data(_ctx(block=12), "USA", 80, 90, 85)
        assert result.ok
        assert result.value == 0

        assert ledger.get_submission(0) == Submission(
            country="USA", bribery_score=80, transparency_score=90,
            audit_score=85, timestamp=12, submitter="ST1TEST",
        )
        assert ledger.get_verification(0) == Verification(
            verifier_count=0, approved=False, timestamp=12,
        )
        assert ledger.next_submission_id == 1

    def test_ids_are_sequential_without_dedup(self, ledger):
        ids = [ledger.submit_data(_ctx(), "USA", 80, 90, 85).value for _ in range(4)]
        assert ids == [0, 1, 2, 3]
        assert len(ledger.submissions) == 4

    def test_invalid_country(self, ledger):
        result = ledger.submit_data(_ctx(), "USAA", 80, 90, 85)
        assert not result.ok
        assert result.error is ErrorCode.INVALID_COUNTRY
        assert ledger.submissions == {}

    def test_invalid_score_consumes_no_id(self, ledger):
        assert ledger.submit_data(_ctx(), "USA", 80, 90, 85).value == 0
        result = ledger.submit_data(_ctx(), "USA", 101, 90, 85)
        assert result.error is ErrorCode.INVALID_SCORE
        assert ledger.next_submission_id == 1
        assert ledger.get_submission(1) is None
        assert ledger.get_verification(1) is None
        assert ledger.submit_data(_ctx(), "FRA", 10, 20, 30).value == 1

    @pytest.mark.parametrize("scores", [(101, 0, 0), (0, 101, 0), (0, 0, 101), (255, 255, 255)])
    def test_any_score_over_100_rejected(self, ledger, scores):
        result = ledger.submit_data(_ctx(), "USA", *scores)
        assert result.error is ErrorCode.INVALID_SCORE
        assert ledger.next_submission_id == 0

    def test_unknown_lookups_return_none(self, ledger):
        assert ledger.get_submission(0) is None
        assert ledger.get_verification(42) is None
