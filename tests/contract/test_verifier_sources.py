"""Tests for verifier membership sources."""

import pytest

from corrindex.contract.verifiers import MetagraphVerifierSet, StaticVerifierSet, VerifierSource


class MockMetagraph:
    """Minimal mock metagraph for verifier membership."""

    def __init__(self, entries: list[dict]):
        """entries: list of {hotkey, vpermit}"""
        self.hotkeys = [e["hotkey"] for e in entries]
        self.validator_permit = [e.get("vpermit", False) for e in entries]


class BrokenMetagraph:
    @property
    def hotkeys(self):
        raise RuntimeError("metagraph not synced")


@pytest.fixture
def metagraph():
    return MockMetagraph([
        {"hotkey": "validator_a", "vpermit": True},
        {"hotkey": "validator_b", "vpermit": True},
        {"hotkey": "miner_x", "vpermit": False},
    ])


class TestStaticVerifierSet:

    def test_membership(self):
        verifiers = StaticVerifierSet(["ST1A", "ST1B"])
        assert verifiers.is_verifier("ST1A")
        assert not verifiers.is_verifier("ST3FAKE")

    def test_empty_set_rejects_all(self):
        assert not StaticVerifierSet().is_verifier("ST1A")

    def test_satisfies_protocol(self):
        assert isinstance(StaticVerifierSet(), VerifierSource)


class TestMetagraphVerifierSet:

    def test_permitted_validator_accepted(self, metagraph):
        assert MetagraphVerifierSet(metagraph).is_verifier("validator_a")

    def test_without_permit_rejected(self, metagraph):
        assert not MetagraphVerifierSet(metagraph).is_verifier("miner_x")

    def test_permit_not_required(self, metagraph):
        assert MetagraphVerifierSet(metagraph, require_permit=False).is_verifier("miner_x")

    def test_unknown_and_empty_rejected(self, metagraph):
        verifiers = MetagraphVerifierSet(metagraph)
        assert not verifiers.is_verifier("nobody")
        assert not verifiers.is_verifier("")

    def test_broken_metagraph_fails_closed(self):
        assert not MetagraphVerifierSet(BrokenMetagraph()).is_verifier("validator_a")

    def test_update_metagraph(self, metagraph):
        verifiers = MetagraphVerifierSet(metagraph)
        verifiers.update_metagraph(MockMetagraph([{"hotkey": "validator_c", "vpermit": True}]))
        assert verifiers.is_verifier("validator_c")
        assert not verifiers.is_verifier("validator_a")

    def test_satisfies_protocol(self, metagraph):
        assert isinstance(MetagraphVerifierSet(metagraph), VerifierSource)
