"""Replay entrypoint.

Applies a JSON list of contract calls to a fresh contract, in order, and
prints every result followed by the final snapshot. Useful for auditing:
two parties replaying the same call list must print identical hashes.

Call format:
  {"op": "submit_data", "caller": "ST1...", "block": 12,
   "args": {"country": "USA", "bribery_score": 80, ...}}
"""

from __future__ import annotations

import argparse
import inspect
import json
import sys
from typing import Any

import bittensor as bt
from pydantic import BaseModel, Field, ValidationError

from corrindex.config import load_settings
from corrindex.contract import CallContext, IndexContract, OperationResult, StaticVerifierSet


class ReplayCall(BaseModel):
    """One recorded contract call."""

    op: str
    caller: str
    block: int = Field(default=0, ge=0)
    args: dict[str, Any] = Field(default_factory=dict)


_OPS = {
    "set_authority": IndexContract.set_authority,
    "set_weights": IndexContract.set_weights,
    "set_calc_method": IndexContract.set_calc_method,
    "submit_data": IndexContract.submit_data,
    "verify_submission": IndexContract.verify_submission,
}


def apply_call(contract: IndexContract, call: ReplayCall) -> OperationResult:
    """Dispatch one recorded call. Raises ValueError for unknown ops."""
    handler = _OPS.get(call.op)
    if handler is None:
        raise ValueError(f"Unknown op: {call.op}")
    ctx = CallContext(caller=call.caller, block_height=call.block)
    return handler(contract, ctx, **call.args)


def load_calls(raw: Any) -> list[ReplayCall]:
    """Validate decoded JSON into replay calls without applying any.

    Raises TypeError for a non-list document, a non-object entry or args
    that do not fit the op's signature; ValueError (including
    pydantic.ValidationError) for unknown ops or malformed fields.
    """
    if not isinstance(raw, list):
        raise TypeError(f"expected a list of calls, got {type(raw).__name__}")

    calls = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise TypeError(f"call {i}: expected an object, got {type(entry).__name__}")
        call = ReplayCall(**entry)
        handler = _OPS.get(call.op)
        if handler is None:
            raise ValueError(f"call {i}: unknown op: {call.op}")
        try:
            inspect.signature(handler).bind(None, None, **call.args)
        except TypeError as e:
            raise TypeError(f"call {i} ({call.op}): {e}") from e
        calls.append(call)
    return calls


def replay(contract: IndexContract, calls: list[ReplayCall]) -> list[OperationResult]:
    results = []
    for i, call in enumerate(calls):
        result = apply_call(contract, call)
        bt.logging.debug({"index_replay": {"event": "call_applied", "n": i, "op": call.op, "ok": result.ok}})
        results.append(result)
    return results


def _format_result(call: ReplayCall, result: OperationResult) -> dict[str, Any]:
    out: dict[str, Any] = {"op": call.op, "ok": result.ok}
    if result.ok:
        out["value"] = result.value
    else:
        out["error"] = result.error.value
        out["code"] = result.error.code
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay corruption index contract calls")
    parser.add_argument("calls", help="Path to a JSON file holding a list of calls")
    parser.add_argument(
        "--verifier", action="append", default=[],
        help="Principal recognized as a verifier (repeatable)",
    )
    parser.add_argument("--block", type=int, default=None, help="Snapshot block height (default: last call's block)")
    args = parser.parse_args(argv)

    # ValueError covers JSONDecodeError, UnicodeDecodeError and ValidationError.
    try:
        with open(args.calls, encoding="utf-8") as f:
            raw = json.load(f)
        calls = load_calls(raw)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        bt.logging.error({"index_replay": {"event": "load_failed", "path": args.calls, "error": str(e)}})
        return 1

    settings = load_settings()
    contract = IndexContract.from_settings(settings, StaticVerifierSet(args.verifier))

    bt.logging.info({"index_replay": {"event": "starting", "calls": len(calls), "verifiers": len(args.verifier)}})
    results = replay(contract, calls)

    for call, result in zip(calls, results):
        print(json.dumps(_format_result(call, result), sort_keys=True))

    block = args.block if args.block is not None else max((c.block for c in calls), default=0)
    snapshot = contract.export_snapshot(block_height=block)
    print(snapshot.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
