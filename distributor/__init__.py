"""
Token holder distributor.

Splits a vault's balance between the token holder contract and a beneficiary,
then triggers the contract's voucher sell/buy cycle, one confirmed transaction
at a time.
"""
from distributor.cancellation import Cancellation
from distributor.config import DistributionConfig, DistributorSettings
from distributor.errors import (
    CancelledError,
    ChainError,
    ChainQueryError,
    ConfigError,
    DistributionError,
    InsufficientFunds,
    OrchestrationError,
    ReceiptFailed,
    SubmissionError,
    TransactionNotFound,
)
from distributor.executor import StepExecutor
from distributor.orchestrator import Orchestrator
from distributor.splitter import compute_distribution
from distributor.waiter import TransactionWaiter

__all__ = [
    "Cancellation",
    "DistributionConfig",
    "DistributorSettings",
    "Orchestrator",
    "StepExecutor",
    "TransactionWaiter",
    "compute_distribution",
    # Errors
    "CancelledError",
    "ChainError",
    "ChainQueryError",
    "ConfigError",
    "DistributionError",
    "InsufficientFunds",
    "OrchestrationError",
    "ReceiptFailed",
    "SubmissionError",
    "TransactionNotFound",
]
