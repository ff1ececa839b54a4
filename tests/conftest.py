"""
Project-wide pytest fixtures.

Use these across test modules. Helpers live in tests.common.
"""
from __future__ import annotations

import logging

import pytest

# Ensure project root on path before any local imports
from tests.common import (
    build_settings,
    build_token_holder,
    ensure_project_root,
)

ensure_project_root()

logger = logging.getLogger(__name__)


@pytest.fixture
def settings():
    """Valid distributor settings."""
    return build_settings()


@pytest.fixture
def config(settings):
    """Resolved distribution config with vault and processing identities."""
    return settings.resolve()


@pytest.fixture
def token_holder():
    """Token holder contract binding (encoding only)."""
    return build_token_holder()


@pytest.fixture
def simulated_chain(config):
    """Simulated chain with the vault funded and gas for the processing identity."""
    from distributor.chain.simulated import SimulatedChainClient

    return SimulatedChainClient(
        balances={
            config.vault.address: 900000,
            config.processing.address: 10**18,
        },
        gas_price=10,
    )
