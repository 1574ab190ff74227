"""Categorical results for contract entry points.

Mutating calls never raise for a violated precondition. They return an
OperationResult carrying either a value or one ErrorCode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Failure categories returned by contract entry points."""

    UNAUTHORIZED = "Unauthorized"
    INVALID_SCORE = "InvalidScore"
    INVALID_COUNTRY = "InvalidCountry"
    INVALID_WEIGHT = "InvalidWeight"
    DATA_NOT_FOUND = "DataNotFound"
    ALREADY_SET = "AlreadySet"
    INVALID_PRINCIPAL = "InvalidPrincipal"
    INVALID_CALC_METHOD = "InvalidCalcMethod"

    @property
    def code(self) -> int:
        """Stable numeric code for hosts that expose errors as integers."""
        return _NUMERIC_CODES[self]


_NUMERIC_CODES: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 100,
    ErrorCode.INVALID_SCORE: 101,
    ErrorCode.INVALID_COUNTRY: 102,
    ErrorCode.INVALID_WEIGHT: 103,
    ErrorCode.DATA_NOT_FOUND: 104,
    ErrorCode.ALREADY_SET: 105,
    ErrorCode.INVALID_PRINCIPAL: 106,
    ErrorCode.INVALID_CALC_METHOD: 110,
}


class IndexOperationError(Exception):
    """Raised by OperationResult.unwrap() on a failed result."""

    def __init__(self, error: ErrorCode):
        super().__init__(f"{error.value} ({error.code})")
        self.error = error


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a mutating contract call."""

    ok: bool
    value: Any = None
    error: ErrorCode | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = True) -> OperationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorCode) -> OperationResult:
        return cls(ok=False, error=error)

    def unwrap(self) -> Any:
        """Return the value, or raise IndexOperationError if the call failed."""
        if not self.ok:
            raise IndexOperationError(self.error)
        return self.value


__all__ = ["ErrorCode", "IndexOperationError", "OperationResult"]
