"""
Vault balance splitting.

Pure integer arithmetic: reserve the transfer fees, check what is left is
positive, then split it 1/3 to the token holder contract and 2/3 to the
beneficiary.
"""
import logging

from distributor.errors import InsufficientFunds
from distributor.models import (
    FEE_RESERVE_TRANSACTIONS,
    PRIMARY_PARTS,
    SECONDARY_PARTS,
    SPLIT_DENOMINATOR,
    SplitResult,
)

logger = logging.getLogger(__name__)


def fee_reserve(gas_price: int, gas_limit: int) -> int:
    """Fees held back for the two vault transfers."""
    if gas_price < 0 or gas_limit < 0:
        raise ValueError("gas_price and gas_limit must be non-negative")
    return gas_limit * FEE_RESERVE_TRANSACTIONS * gas_price


def compute_distribution(raw_balance: int, gas_price: int, gas_limit: int) -> SplitResult:
    """
    Split the vault balance after reserving transfer fees.

    Args:
        raw_balance: Vault balance in wei
        gas_price: Gas price in wei
        gas_limit: Gas limit of a single transfer

    Returns:
        SplitResult with primary_share = net // 3 and secondary_share = 2 * primary_share

    Raises:
        InsufficientFunds: If the balance left after fees is zero or negative
    """
    reserve = fee_reserve(gas_price, gas_limit)
    net_balance = raw_balance - reserve
    if net_balance <= 0:
        raise InsufficientFunds(
            f"Not enough balance in vault to cover txn fees "
            f"(balance={raw_balance}, fee_reserve={reserve})"
        )

    unit = net_balance // SPLIT_DENOMINATOR
    result = SplitResult(
        net_balance=net_balance,
        primary_share=unit * PRIMARY_PARTS,
        secondary_share=unit * SECONDARY_PARTS,
    )

    if result.undistributed:
        # Remainder stays in the vault, flagged for review
        logger.info(f"Split leaves {result.undistributed} wei undistributed in vault")

    return result
