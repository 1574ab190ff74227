"""Configuration store: authority identity, scoring weights, calc method.

The authority can be set exactly once. Weights and method changes are
authority-only and affect future aggregations only.
"""

from __future__ import annotations

from typing import Iterable

import bittensor as bt

from .models import (
    BURN_PRINCIPAL,
    WEIGHT_TOTAL,
    CalcMethod,
    CallContext,
    IndexConfiguration,
    Weights,
    short_principal,
)
from .results import ErrorCode, OperationResult


DEFAULT_RESERVED_PRINCIPALS: frozenset[str] = frozenset({"", BURN_PRINCIPAL})


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigurationStore:
    """Holds the contract configuration and gates changes to it."""

    def __init__(
        self,
        config: IndexConfiguration | None = None,
        reserved_principals: Iterable[str] = DEFAULT_RESERVED_PRINCIPALS,
    ):
        self.config = config or IndexConfiguration()
        self.reserved_principals = frozenset(reserved_principals)

    @property
    def authority(self) -> str | None:
        return self.config.authority

    @property
    def weights(self) -> Weights:
        return self.config.weights

    @property
    def calc_method(self) -> CalcMethod:
        return self.config.calc_method

    def _reject(self, event: str, ctx: CallContext, error: ErrorCode) -> OperationResult:
        bt.logging.warning({"index_config": {"event": event, "caller": ctx.short_caller, "reason": error.value}})
        return OperationResult.failure(error)

    def is_authority(self, principal: str) -> bool:
        return self.config.authority is not None and principal == self.config.authority

    def set_authority(self, ctx: CallContext, principal: str) -> OperationResult:
        """Set the authority. Allowed once, for a non-reserved principal."""
        if not isinstance(principal, str) or principal in self.reserved_principals:
            return self._reject("set_authority_rejected", ctx, ErrorCode.INVALID_PRINCIPAL)
        if self.config.authority is not None:
            return self._reject("set_authority_rejected", ctx, ErrorCode.ALREADY_SET)

        self.config = self.config.model_copy(update={"authority": principal})
        bt.logging.info({"index_config": {"event": "authority_set", "authority": short_principal(principal), "block": ctx.block_height}})
        return OperationResult.success()

    def set_weights(
        self, ctx: CallContext, bribery: int, transparency: int, audit: int,
    ) -> OperationResult:
        """Replace all three weights at once. Authority only; must sum to WEIGHT_TOTAL."""
        if not self.is_authority(ctx.caller):
            return self._reject("set_weights_rejected", ctx, ErrorCode.UNAUTHORIZED)

        values = (bribery, transparency, audit)
        if not all(_is_plain_int(v) and v >= 0 for v in values) or sum(values) != WEIGHT_TOTAL:
            return self._reject("set_weights_rejected", ctx, ErrorCode.INVALID_WEIGHT)

        weights = Weights(bribery=bribery, transparency=transparency, audit=audit)
        self.config = self.config.model_copy(update={"weights": weights})
        bt.logging.info({"index_config": {"event": "weights_set", "weights": weights.model_dump(), "block": ctx.block_height}})
        return OperationResult.success()

    def set_calc_method(self, ctx: CallContext, method: str | CalcMethod) -> OperationResult:
        """Switch the calculation method. Authority only."""
        if not self.is_authority(ctx.caller):
            return self._reject("set_calc_method_rejected", ctx, ErrorCode.UNAUTHORIZED)

        try:
            calc_method = CalcMethod(method)
        except ValueError:
            return self._reject("set_calc_method_rejected", ctx, ErrorCode.INVALID_CALC_METHOD)

        self.config = self.config.model_copy(update={"calc_method": calc_method})
        bt.logging.info({"index_config": {"event": "calc_method_set", "method": calc_method.value, "block": ctx.block_height}})
        return OperationResult.success()


__all__ = ["DEFAULT_RESERVED_PRINCIPALS", "ConfigurationStore"]
