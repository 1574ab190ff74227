"""Corruption index contract: entry points and query surface.

Wires the configuration store, submission ledger, verification tracker and
index aggregator together behind one object. Each instance owns its own
state, so hosts (and tests) can run independent contracts side by side.

Access groups:
- Unrestricted: submit_data and every query
- Authority-only: set_weights, set_calc_method (set_authority only once)
- Verifier-restricted: verify_submission
- Internal: IndexAggregator.update_index, reached only through quorum
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from corrindex.determinism import compute_section_hash

from .aggregator import IndexAggregator, compute_score
from .configuration import DEFAULT_RESERVED_PRINCIPALS, ConfigurationStore
from .models import (
    INDEX_VERSION,
    AggregationRecord,
    CalcMethod,
    CallContext,
    CountryIndex,
    IndexConfiguration,
    IndexSnapshot,
    Submission,
    Verification,
    Weights,
)
from .results import OperationResult
from .submissions import SubmissionLedger
from .verification import VerificationTracker
from .verifiers import VerifierSource

if TYPE_CHECKING:
    from corrindex.config import IndexSettings


class IndexContract:
    """Single-process corruption index state machine."""

    index_version = INDEX_VERSION

    def __init__(
        self,
        verifiers: VerifierSource,
        config: IndexConfiguration | None = None,
        reserved_principals: Iterable[str] = DEFAULT_RESERVED_PRINCIPALS,
    ):
        self.config_store = ConfigurationStore(config, reserved_principals)
        self.ledger = SubmissionLedger()
        self.aggregator = IndexAggregator(self.config_store)
        self.tracker = VerificationTracker(self.ledger, self.aggregator, verifiers)

    @classmethod
    def from_settings(cls, settings: IndexSettings, verifiers: VerifierSource) -> IndexContract:
        """Build a contract from IndexSettings (see corrindex.config)."""
        return cls(
            verifiers=verifiers,
            config=settings.to_configuration(),
            reserved_principals=settings.reserved_principals,
        )

    # -- Configuration --

    def set_authority(self, ctx: CallContext, principal: str) -> OperationResult:
        return self.config_store.set_authority(ctx, principal)

    def set_weights(
        self, ctx: CallContext, bribery: int, transparency: int, audit: int,
    ) -> OperationResult:
        return self.config_store.set_weights(ctx, bribery, transparency, audit)

    def set_calc_method(self, ctx: CallContext, method: str | CalcMethod) -> OperationResult:
        return self.config_store.set_calc_method(ctx, method)

    # -- Submission / verification --

    def submit_data(
        self,
        ctx: CallContext,
        country: str,
        bribery_score: int,
        transparency_score: int,
        audit_score: int,
    ) -> OperationResult:
        return self.ledger.submit_data(ctx, country, bribery_score, transparency_score, audit_score)

    def verify_submission(self, ctx: CallContext, submission_id: int) -> OperationResult:
        return self.tracker.verify_submission(ctx, submission_id)

    # -- Queries --

    def get_index(self, country: str) -> CountryIndex | None:
        return self.aggregator.get_index(country)

    def get_submission(self, submission_id: int) -> Submission | None:
        return self.ledger.get_submission(submission_id)

    def get_verification(self, submission_id: int) -> Verification | None:
        return self.ledger.get_verification(submission_id)

    def get_current_weights(self) -> Weights:
        return self.config_store.weights

    def get_calc_method(self) -> CalcMethod:
        return self.config_store.calc_method

    def get_authority(self) -> str | None:
        return self.config_store.authority

    def get_next_submission_id(self) -> int:
        return self.ledger.next_submission_id

    def get_aggregation_log(self, country: str | None = None) -> list[AggregationRecord]:
        return self.aggregator.get_audit_log(country)

    # -- Audit --

    def recompute_score(self, submission_id: int) -> float | None:
        """Score a submission would get under the current configuration.

        Read-only; returns None for unknown ids.
        """
        submission = self.ledger.get_submission(submission_id)
        if submission is None:
            return None
        return compute_score(
            self.config_store.config,
            submission.bribery_score,
            submission.transparency_score,
            submission.audit_score,
        )

    def export_snapshot(self, block_height: int) -> IndexSnapshot:
        """Export the full contract state with per-section content hashes."""
        sections = {
            "configuration": self.config_store.config,
            "submissions": self.ledger.submissions,
            "verifications": self.ledger.verifications,
            "indices": self.aggregator.indices,
            "aggregation_log": self.aggregator.audit_log,
        }
        return IndexSnapshot(
            index_version=self.index_version,
            block_height=block_height,
            configuration=self.config_store.config,
            next_submission_id=self.ledger.next_submission_id,
            submissions=dict(self.ledger.submissions),
            verifications=dict(self.ledger.verifications),
            indices=dict(self.aggregator.indices),
            aggregation_log=list(self.aggregator.audit_log),
            content_hashes={name: compute_section_hash(data) for name, data in sections.items()},
        )


__all__ = ["IndexContract"]
