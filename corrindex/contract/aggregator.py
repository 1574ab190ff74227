"""Index aggregation: folds one approved submission into a country's index.

This is the only writer of CountryIndex records. The fold itself is a pure
function of (prior index, submission, current configuration, block height):
the new score replaces the old one and only the contribution count carries
over. Configuration changes therefore apply to future folds, never to
already-published scores.
"""

from __future__ import annotations

import bittensor as bt

from .configuration import ConfigurationStore
from .models import (
    MAX_INDEX_SCORE,
    AggregationRecord,
    CalcMethod,
    CallContext,
    CountryIndex,
    IndexConfiguration,
    Submission,
)
from .results import ErrorCode, OperationResult
from .submissions import check_country, check_scores


def compute_score(
    config: IndexConfiguration,
    bribery_score: int,
    transparency_score: int,
    audit_score: int,
) -> float:
    """Score for one set of raw measurements under ``config``.

    weighted-average: (b*Wb + t*Wt + a*Wa) / 100
    simple-average:   (b + t + a) / 3

    Both are clamped to [0, MAX_INDEX_SCORE].
    """
    if config.calc_method is CalcMethod.WEIGHTED_AVERAGE:
        w = config.weights
        raw = (
            bribery_score * w.bribery
            + transparency_score * w.transparency
            + audit_score * w.audit
        ) / 100
    else:
        raw = (bribery_score + transparency_score + audit_score) / 3
    return max(0.0, min(raw, float(MAX_INDEX_SCORE)))


def fold_index(
    prior: CountryIndex | None,
    submission: Submission,
    config: IndexConfiguration,
    block_height: int,
) -> CountryIndex:
    """Return the index that results from folding ``submission`` into ``prior``."""
    score = compute_score(
        config,
        submission.bribery_score,
        submission.transparency_score,
        submission.audit_score,
    )
    return CountryIndex(
        score=score,
        last_updated=block_height,
        submission_count=(prior.submission_count if prior else 0) + 1,
        weights=config.weights,
    )


class IndexAggregator:
    """Owns the per-country index records and the aggregation audit trail."""

    def __init__(self, config_store: ConfigurationStore):
        self.config_store = config_store
        self.indices: dict[str, CountryIndex] = {}
        self.audit_log: list[AggregationRecord] = []

    def update_index(
        self,
        ctx: CallContext,
        country: str,
        bribery_score: int,
        transparency_score: int,
        audit_score: int,
        submission_id: int | None = None,
    ) -> OperationResult:
        """Fold one approved submission into the country's index.

        Re-validates its inputs and requires the authority to be set.
        Returns the new score on success.
        """
        if self.config_store.authority is None:
            error = ErrorCode.UNAUTHORIZED
        else:
            error = check_country(country) or check_scores(bribery_score, transparency_score, audit_score)
        if error is not None:
            bt.logging.warning({"index_aggregator": {"event": "update_rejected", "country": str(country), "reason": error.value}})
            return OperationResult.failure(error)

        config = self.config_store.config
        submission = Submission(
            country=country,
            bribery_score=bribery_score,
            transparency_score=transparency_score,
            audit_score=audit_score,
            timestamp=ctx.block_height,
            submitter=ctx.caller,
        )
        new_index = fold_index(self.indices.get(country), submission, config, ctx.block_height)
        record = AggregationRecord(
            submission_id=-1 if submission_id is None else submission_id,
            country=country,
            score=new_index.score,
            method=config.calc_method,
            weights=config.weights,
            block_height=ctx.block_height,
        )

        self.indices[country] = new_index
        self.audit_log.append(record)

        bt.logging.info({
            "index_aggregator": {
                "event": "index_updated",
                "country": country,
                "submission_id": record.submission_id,
                "score": new_index.score,
                "submission_count": new_index.submission_count,
                "method": config.calc_method.value,
                "block": ctx.block_height,
            }
        })
        return OperationResult.success(new_index.score)

    def get_index(self, country: str) -> CountryIndex | None:
        return self.indices.get(country)

    def get_audit_log(self, country: str | None = None) -> list[AggregationRecord]:
        if country is None:
            return list(self.audit_log)
        return [r for r in self.audit_log if r.country == country]


__all__ = ["IndexAggregator", "compute_score", "fold_index"]
