"""Bootstrap settings for an index contract.

Defaults can be overridden from the environment (CORRINDEX_* variables,
double underscore for nesting). A .env file is loaded first unless
CORRINDEX_TEST_MODE is set.
"""

from __future__ import annotations

import os
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from corrindex.contract.configuration import DEFAULT_RESERVED_PRINCIPALS
from corrindex.contract.models import DEFAULT_WEIGHTS, CalcMethod, IndexConfiguration, Weights


ENV_PREFIX = "CORRINDEX_"


class IndexSettings(BaseModel):
    """Initial configuration for a new contract."""

    weights: Weights = DEFAULT_WEIGHTS
    calc_method: CalcMethod = CalcMethod.WEIGHTED_AVERAGE
    authority: str | None = None
    reserved_principals: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_RESERVED_PRINCIPALS)
    )

    @model_validator(mode="after")
    def _authority_not_reserved(self) -> IndexSettings:
        if self.authority is not None and self.authority in self.reserved_principals:
            raise ValueError(f"authority {self.authority!r} is a reserved principal")
        return self

    def to_configuration(self) -> IndexConfiguration:
        return IndexConfiguration(
            authority=self.authority,
            calc_method=self.calc_method,
            weights=self.weights,
        )


def is_test_mode(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get(f"{ENV_PREFIX}TEST_MODE", "").lower() in ("true", "1")


def load_settings(env: Mapping[str, str] | None = None) -> IndexSettings:
    """Build IndexSettings from defaults overlaid with environment values.

    Raises pydantic.ValidationError if the resulting settings are invalid
    (e.g. weights that do not sum to 100).
    """
    if env is None:
        if not is_test_mode():
            load_dotenv()
        env = os.environ

    data: dict = {}

    weight_overrides = {
        name: int(env[f"{ENV_PREFIX}WEIGHTS__{name.upper()}"])
        for name in ("bribery", "transparency", "audit")
        if f"{ENV_PREFIX}WEIGHTS__{name.upper()}" in env
    }
    if weight_overrides:
        data["weights"] = {**DEFAULT_WEIGHTS.model_dump(), **weight_overrides}

    calc_method = env.get(f"{ENV_PREFIX}CALC_METHOD")
    if calc_method:
        data["calc_method"] = calc_method

    authority = env.get(f"{ENV_PREFIX}AUTHORITY")
    if authority:
        data["authority"] = authority

    reserved = env.get(f"{ENV_PREFIX}RESERVED_PRINCIPALS")
    if reserved:
        extra = [p.strip() for p in reserved.split(",") if p.strip()]
        data["reserved_principals"] = sorted(DEFAULT_RESERVED_PRINCIPALS | set(extra))

    return IndexSettings(**data)


__all__ = ["ENV_PREFIX", "IndexSettings", "is_test_mode", "load_settings"]
