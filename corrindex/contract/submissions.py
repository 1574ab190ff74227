"""Submission ledger: append-only, sequentially numbered raw data records.

Each submission is co-created with its Verification record so the two
ledgers stay paired 1:1 by id.
"""

from __future__ import annotations

import bittensor as bt

from .models import MAX_COUNTRY_LENGTH, MAX_RAW_SCORE, CallContext, Submission, Verification
from .results import ErrorCode, OperationResult


def check_country(country: object) -> ErrorCode | None:
    """Country codes are 1-3 characters."""
    if not isinstance(country, str) or not 1 <= len(country) <= MAX_COUNTRY_LENGTH:
        return ErrorCode.INVALID_COUNTRY
    return None


def check_scores(*scores: object) -> ErrorCode | None:
    """Raw scores are integers in [0, MAX_RAW_SCORE]."""
    for score in scores:
        if isinstance(score, bool) or not isinstance(score, int):
            return ErrorCode.INVALID_SCORE
        if score < 0 or score > MAX_RAW_SCORE:
            return ErrorCode.INVALID_SCORE
    return None


class SubmissionLedger:
    """Stores submissions and their paired verification records."""

    def __init__(self) -> None:
        self.submissions: dict[int, Submission] = {}
        self.verifications: dict[int, Verification] = {}
        self.next_submission_id = 0

    def submit_data(
        self,
        ctx: CallContext,
        country: str,
        bribery_score: int,
        transparency_score: int,
        audit_score: int,
    ) -> OperationResult:
        """Record a submission and return its id.

        Nothing is written (and no id is consumed) unless every field
        validates.
        """
        error = check_country(country) or check_scores(bribery_score, transparency_score, audit_score)
        if error is not None:
            bt.logging.warning({"index_ledger": {"event": "submission_rejected", "submitter": ctx.short_caller, "reason": error.value}})
            return OperationResult.failure(error)

        submission_id = self.next_submission_id
        submission = Submission(
            country=country,
            bribery_score=bribery_score,
            transparency_score=transparency_score,
            audit_score=audit_score,
            timestamp=ctx.block_height,
            submitter=ctx.caller,
        )
        verification = Verification(verifier_count=0, approved=False, timestamp=ctx.block_height)

        self.submissions[submission_id] = submission
        self.verifications[submission_id] = verification
        self.next_submission_id = submission_id + 1

        bt.logging.info({"index_ledger": {"event": "submission_recorded", "submission_id": submission_id, "country": country, "block": ctx.block_height}})
        return OperationResult.success(submission_id)

    def get_submission(self, submission_id: int) -> Submission | None:
        return self.submissions.get(submission_id)

    def get_verification(self, submission_id: int) -> Verification | None:
        return self.verifications.get(submission_id)


__all__ = ["SubmissionLedger", "check_country", "check_scores"]
