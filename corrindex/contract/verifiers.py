"""Verifier membership sources.

Which principals count as verifiers is decided outside the contract. A
source only has to answer ``is_verifier(principal)``.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable

import bittensor as bt


@runtime_checkable
class VerifierSource(Protocol):
    """Answers whether a principal may verify submissions."""

    def is_verifier(self, principal: str) -> bool:
        ...


class StaticVerifierSet:
    """Fixed set of verifier principals."""

    def __init__(self, principals: Iterable[str] = ()):
        self.principals = frozenset(principals)

    def is_verifier(self, principal: str) -> bool:
        return principal in self.principals


class MetagraphVerifierSet:
    """Verifier membership backed by a metagraph.

    A principal qualifies if its hotkey is registered and, unless
    ``require_permit`` is False, holds a validator permit. Fail-closed: an
    unreadable metagraph rejects everyone.
    """

    def __init__(self, metagraph: Any, require_permit: bool = True):
        self.metagraph = metagraph
        self.require_permit = require_permit

    def update_metagraph(self, metagraph: Any) -> None:
        """Update the metagraph reference (called after resync)."""
        self.metagraph = metagraph

    def is_verifier(self, principal: str) -> bool:
        if not principal:
            return False

        try:
            hotkeys = list(self.metagraph.hotkeys)
        except Exception:
            bt.logging.warning({"index_verifiers": {"event": "metagraph_unavailable"}})
            return False

        if principal not in hotkeys:
            return False
        if not self.require_permit:
            return True

        idx = hotkeys.index(principal)
        try:
            return bool(self.metagraph.validator_permit[idx])
        except (IndexError, AttributeError):
            return False


__all__ = ["MetagraphVerifierSet", "StaticVerifierSet", "VerifierSource"]
