"""Corruption index: quorum-gated, auditable per-country scoring."""
