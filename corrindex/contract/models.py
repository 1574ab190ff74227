"""Pydantic models for the corruption index contract state.

Four record types make up the logical entity model:
- Submission: raw measurements for one country, immutable once recorded
- Verification: quorum counter paired 1:1 with a submission
- CountryIndex: the published per-country score (derived state)
- AggregationRecord: audit trail entry written on every index update
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Contract constants
# ---------------------------------------------------------------------------

INDEX_VERSION = 1
QUORUM_THRESHOLD = 3
MAX_RAW_SCORE = 100
MAX_INDEX_SCORE = 10000
MAX_COUNTRY_LENGTH = 3
WEIGHT_TOTAL = 100

# Burn identity; never a valid authority.
BURN_PRINCIPAL = "SP000000000000000000002Q6VF78"


class CalcMethod(str, Enum):
    """Recognized index calculation methods."""

    WEIGHTED_AVERAGE = "weighted-average"
    SIMPLE_AVERAGE = "simple-average"


# ---------------------------------------------------------------------------
# Call context
# ---------------------------------------------------------------------------


def short_principal(principal: str | None) -> str:
    """Principal truncated for log lines."""
    return principal[:16] if principal else "none"


class CallContext(BaseModel):
    """Ambient inputs supplied by the host for every mutating call."""

    model_config = ConfigDict(frozen=True)

    caller: str
    block_height: int = Field(ge=0)

    @property
    def short_caller(self) -> str:
        return short_principal(self.caller)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class Weights(BaseModel):
    """Scoring weights for the three raw measurements. Always sum to 100."""

    model_config = ConfigDict(frozen=True)

    bribery: int = Field(ge=0)
    transparency: int = Field(ge=0)
    audit: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_total(self) -> Weights:
        total = self.bribery + self.transparency + self.audit
        if total != WEIGHT_TOTAL:
            raise ValueError(f"weights must sum to {WEIGHT_TOTAL}, got {total}")
        return self


DEFAULT_WEIGHTS = Weights(bribery=40, transparency=30, audit=30)


class IndexConfiguration(BaseModel):
    """Per-contract configuration. Replaced wholesale on every change."""

    model_config = ConfigDict(frozen=True)

    authority: str | None = None
    calc_method: CalcMethod = CalcMethod.WEIGHTED_AVERAGE
    weights: Weights = DEFAULT_WEIGHTS


# ---------------------------------------------------------------------------
# Ledger records
# ---------------------------------------------------------------------------


class Submission(BaseModel):
    """Raw measurements submitted for one country."""

    model_config = ConfigDict(frozen=True)

    country: str = Field(min_length=1, max_length=MAX_COUNTRY_LENGTH)
    bribery_score: int = Field(ge=0, le=MAX_RAW_SCORE)
    transparency_score: int = Field(ge=0, le=MAX_RAW_SCORE)
    audit_score: int = Field(ge=0, le=MAX_RAW_SCORE)
    timestamp: int
    submitter: str


class Verification(BaseModel):
    """Quorum state for one submission.

    ``approved`` is monotone: once the counter reaches QUORUM_THRESHOLD it
    never reverts.
    """

    model_config = ConfigDict(frozen=True)

    verifier_count: int = Field(default=0, ge=0)
    approved: bool = False
    timestamp: int


class CountryIndex(BaseModel):
    """Published score for a country plus the weights used to produce it."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0, le=MAX_INDEX_SCORE)
    last_updated: int
    submission_count: int = Field(ge=1)
    weights: Weights


class AggregationRecord(BaseModel):
    """One entry of the aggregation audit trail."""

    model_config = ConfigDict(frozen=True)

    submission_id: int
    country: str
    score: float
    method: CalcMethod
    weights: Weights
    block_height: int


# ---------------------------------------------------------------------------
# Snapshot (audit export)
# ---------------------------------------------------------------------------


class IndexSnapshot(BaseModel):
    """Full contract state at a block height, with per-section hashes.

    Replicas that applied the same calls produce identical content_hashes.
    """

    index_version: int = INDEX_VERSION
    block_height: int
    configuration: IndexConfiguration
    next_submission_id: int
    submissions: dict[int, Submission] = Field(default_factory=dict)
    verifications: dict[int, Verification] = Field(default_factory=dict)
    indices: dict[str, CountryIndex] = Field(default_factory=dict)
    aggregation_log: list[AggregationRecord] = Field(default_factory=list)
    content_hashes: dict[str, str] = Field(
        default_factory=dict,
        description="Map of section name -> SHA256 hex digest",
    )


__all__ = [
    "BURN_PRINCIPAL",
    "DEFAULT_WEIGHTS",
    "INDEX_VERSION",
    "MAX_COUNTRY_LENGTH",
    "MAX_INDEX_SCORE",
    "MAX_RAW_SCORE",
    "QUORUM_THRESHOLD",
    "WEIGHT_TOTAL",
    "AggregationRecord",
    "CalcMethod",
    "CallContext",
    "CountryIndex",
    "IndexConfiguration",
    "IndexSnapshot",
    "Submission",
    "Verification",
    "Weights",
    "short_principal",
]
