"""Corruption index contract.

Raw measurements are submitted to an append-only ledger, counted towards a
verification quorum, and folded into a per-country index once the quorum
is reached:
- configuration: authority, weights and calc method
- submissions: sequential submission ids, paired verification records
- verification: quorum counting and the aggregation trigger
- aggregator: pure score fold and the country index records
"""

from .aggregator import IndexAggregator, compute_score, fold_index
from .configuration import ConfigurationStore
from .index_contract import IndexContract
from .models import (
    INDEX_VERSION,
    QUORUM_THRESHOLD,
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
from .results import ErrorCode, IndexOperationError, OperationResult
from .submissions import SubmissionLedger
from .verification import VerificationTracker
from .verifiers import MetagraphVerifierSet, StaticVerifierSet, VerifierSource

__all__ = [
    "INDEX_VERSION",
    "QUORUM_THRESHOLD",
    "AggregationRecord",
    "CalcMethod",
    "CallContext",
    "ConfigurationStore",
    "CountryIndex",
    "ErrorCode",
    "IndexAggregator",
    "IndexConfiguration",
    "IndexContract",
    "IndexOperationError",
    "IndexSnapshot",
    "MetagraphVerifierSet",
    "OperationResult",
    "StaticVerifierSet",
    "Submission",
    "SubmissionLedger",
    "Verification",
    "VerificationTracker",
    "VerifierSource",
    "Weights",
    "compute_score",
    "fold_index",
]
