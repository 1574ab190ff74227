"""Tests for bootstrap settings and environment overrides."""

import pytest
from pydantic import ValidationError

from corrindex.config import IndexSettings, is_test_mode, load_settings
from corrindex.contract import CalcMethod, IndexContract, StaticVerifierSet, Weights
from corrindex.contract.models import BURN_PRINCIPAL


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(env={})
        assert settings.weights == Weights(bribery=40, transparency=30, audit=30)
        assert settings.calc_method is CalcMethod.WEIGHTED_AVERAGE
        assert settings.authority is None
        assert BURN_PRINCIPAL in settings.reserved_principals

    def test_weight_overrides(self):
        settings = load_settings(env={
            "CORRINDEX_WEIGHTS__BRIBERY": "50",
            "CORRINDEX_WEIGHTS__AUDIT": "20",
        })
        assert settings.weights == Weights(bribery=50, transparency=30, audit=20)

    def test_invalid_weight_total_raises(self):
        with pytest.raises(ValidationError):
            load_settings(env={"CORRINDEX_WEIGHTS__BRIBERY": "90"})

    def test_calc_method_and_authority(self):
        settings = load_settings(env={
            "CORRINDEX_CALC_METHOD": "simple-average",
            "CORRINDEX_AUTHORITY": "ST2TEST",
        })
        assert settings.calc_method is CalcMethod.SIMPLE_AVERAGE
        assert settings.authority == "ST2TEST"

    def test_invalid_calc_method_raises(self):
        with pytest.raises(ValidationError):
            load_settings(env={"CORRINDEX_CALC_METHOD": "median"})

    def test_extra_reserved_principals(self):
        settings = load_settings(env={"CORRINDEX_RESERVED_PRINCIPALS": "ST0DEAD, ST0BEEF"})
        assert {"ST0DEAD", "ST0BEEF", BURN_PRINCIPAL} <= set(settings.reserved_principals)

    def test_reserved_authority_rejected(self):
        with pytest.raises(ValidationError):
            IndexSettings(authority=BURN_PRINCIPAL)

    def test_reads_process_environment_in_test_mode(self, monkeypatch):
        monkeypatch.setenv("CORRINDEX_TEST_MODE", "true")
        monkeypatch.setenv("CORRINDEX_CALC_METHOD", "simple-average")
        assert is_test_mode()
        assert load_settings().calc_method is CalcMethod.SIMPLE_AVERAGE


class TestContractFromSettings:

    def test_builds_configured_contract(self):
        settings = load_settings(env={
            "CORRINDEX_AUTHORITY": "ST2TEST",
            "CORRINDEX_RESERVED_PRINCIPALS": "ST0DEAD",
        })
        contract = IndexContract.from_settings(settings, StaticVerifierSet())
        assert contract.get_authority() == "ST2TEST"
        assert "ST0DEAD" in contract.config_store.reserved_principals
