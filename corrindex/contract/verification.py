"""Verification tracker: per-submission quorum counter.

Each verifier call increments the counter by one. The call that first
brings the counter to QUORUM_THRESHOLD approves the submission and folds it
into the country index. Later calls keep counting but never aggregate
again.

Quorum counts calls, not distinct verifiers: the same principal may call
repeatedly and each call counts.
"""

from __future__ import annotations

import bittensor as bt

from .aggregator import IndexAggregator
from .models import QUORUM_THRESHOLD, CallContext, Verification
from .results import ErrorCode, OperationResult
from .submissions import SubmissionLedger
from .verifiers import VerifierSource


class VerificationTracker:
    """Advances quorum counters and triggers aggregation on approval."""

    def __init__(
        self,
        ledger: SubmissionLedger,
        aggregator: IndexAggregator,
        verifiers: VerifierSource,
    ):
        self.ledger = ledger
        self.aggregator = aggregator
        self.verifiers = verifiers

    def verify_submission(self, ctx: CallContext, submission_id: int) -> OperationResult:
        """Count one verification for ``submission_id``.

        If this call reaches quorum and aggregation fails (no authority set
        yet), the whole call fails with the aggregator's error and the
        counter, approval flag and timestamp are left where they were. This
        departs from the earlier contract, which ignored the aggregation
        failure and committed the approval anyway; committing it would
        leave an approved submission that never reaches the index, since
        aggregation only runs on the approving call.
        """
        submission = self.ledger.get_submission(submission_id)
        verification = self.ledger.get_verification(submission_id)
        if submission is None or verification is None:
            return self._reject(ctx, submission_id, ErrorCode.DATA_NOT_FOUND)
        if not self.verifiers.is_verifier(ctx.caller):
            return self._reject(ctx, submission_id, ErrorCode.UNAUTHORIZED)

        new_count = verification.verifier_count + 1
        updated = Verification(
            verifier_count=new_count,
            approved=verification.approved or new_count >= QUORUM_THRESHOLD,
            timestamp=ctx.block_height,
        )

        if updated.approved and not verification.approved:
            result = self.aggregator.update_index(
                ctx,
                submission.country,
                submission.bribery_score,
                submission.transparency_score,
                submission.audit_score,
                submission_id=submission_id,
            )
            if not result:
                return self._reject(ctx, submission_id, result.error)
            bt.logging.info({"index_verification": {"event": "quorum_reached", "submission_id": submission_id, "verifier_count": new_count, "block": ctx.block_height}})
        else:
            bt.logging.debug({"index_verification": {"event": "verified", "submission_id": submission_id, "verifier_count": new_count}})

        self.ledger.verifications[submission_id] = updated
        return OperationResult.success()

    def _reject(self, ctx: CallContext, submission_id: int, error: ErrorCode) -> OperationResult:
        bt.logging.warning({"index_verification": {"event": "verify_rejected", "submission_id": submission_id, "caller": ctx.short_caller, "reason": error.value}})
        return OperationResult.failure(error)


__all__ = ["VerificationTracker"]
