"""Canonical hashing for reproducible state comparison.

Two replicas that applied the same calls in the same order must produce
identical hashes, so serialization is key-sorted with fixed separators.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json(data: Any) -> str:
    """Serialize to a canonical JSON string."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)


def compute_hash(data: Any) -> str:
    """SHA256 hex digest of the canonical JSON form of ``data``."""
    return hashlib.sha256(canonical_json(data).encode()).hexdigest()


def _jsonable(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def compute_section_hash(section: Any) -> str:
    """Digest of one IndexSnapshot section (configuration, submissions, ...).

    Record maps are keyed by submission id or country code; ids are hashed
    as their string form so the digest matches the snapshot's JSON export.
    Lists keep their order, which for the aggregation log is call order.
    """
    return compute_hash({"section": _jsonable(section)})


__all__ = ["canonical_json", "compute_hash", "compute_section_hash"]
