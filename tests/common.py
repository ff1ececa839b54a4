"""
Shared test helpers and utilities for project-wide use.

Use these from conftest.py fixtures or individual tests.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional

# Ensure project root is on path when tests run
def _ensure_project_root() -> Path:
    root = Path(__file__).resolve().parent.parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    return root


def ensure_project_root() -> Path:
    """Add project root to sys.path. Idempotent. Returns root Path."""
    return _ensure_project_root()


# Well-known development keys; never hold real funds
VAULT_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
PROCESSING_PRIVATE_KEY = "0x8da4ef21b864d2cc526dbdb2a120bd2874c36c9d0a1fb7f8c63d7f7a8b41de8f"
TOKEN_HOLDER_ADDRESS = "0x1111111111111111111111111111111111111111"
BENEFICIARY_ADDRESS = "0x2222222222222222222222222222222222222222"
RPC_URL = "http://127.0.0.1:8545"


def settings_mapping(**overrides: Optional[str]) -> Dict[str, str]:
    """Environment-style settings for a valid configuration, with overrides."""
    values = {
        "ETHEREUM_JSON_RPC_URL": RPC_URL,
        "VAULT_PRIVATE_KEY": VAULT_PRIVATE_KEY,
        "TOKEN_HOLDER_PROCESSING_KEY": PROCESSING_PRIVATE_KEY,
        "TOKEN_HOLDER_CONTRACT_ADDRESS": TOKEN_HOLDER_ADDRESS,
        "BENEFICIARY_ADDRESS": BENEFICIARY_ADDRESS,
    }
    for name, value in overrides.items():
        if value is None:
            values.pop(name, None)
        else:
            values[name] = value
    return values


def build_settings(**overrides: Optional[str]):
    """DistributorSettings for a valid configuration, with overrides."""
    from distributor.config import DistributorSettings

    return DistributorSettings.from_mapping(settings_mapping(**overrides))


def build_token_holder():
    """TokenHolderContract bound to TOKEN_HOLDER_ADDRESS. No network access is made."""
    from distributor.contracts.token_holder import TokenHolderContract
    from distributor.utils.web3 import AsyncWeb3Helper

    return TokenHolderContract(TOKEN_HOLDER_ADDRESS, AsyncWeb3Helper.make_web3(RPC_URL))
