"""
Error vocabulary for the token holder distributor.

Every failure of a distribution run is raised to the caller as a single
OrchestrationError naming the stage that failed, chained to one of the
more specific errors below.
"""
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from distributor.models import TransactionReceipt


class DistributionError(Exception):
    """Base class for all distributor errors."""


class ConfigError(DistributionError):
    """Malformed key, address or missing setting."""


class ChainQueryError(DistributionError):
    """Gas price or balance query failed."""


class InsufficientFunds(DistributionError):
    """Vault balance does not cover the fee reserve."""


class SubmissionError(DistributionError):
    """Transaction could not be sent."""


class ChainError(DistributionError):
    """Receipt query failed with something other than not-found."""


class CancelledError(DistributionError):
    """
    Cancellation signal fired or deadline passed during a wait.

    Not to be confused with asyncio.CancelledError, which is left to
    propagate untouched.
    """


class TransactionNotFound(DistributionError):
    """Receipt is not available yet; raised by chain clients while pending."""


class ReceiptFailed(DistributionError):
    """Transaction was mined but did not succeed."""

    def __init__(self, receipt: "TransactionReceipt"):
        self.receipt = receipt
        super().__init__(f"tx failed: {receipt!r}")


class OrchestrationError(DistributionError):
    """A distribution stage failed. Carries the stage and the underlying cause."""

    def __init__(self, stage, cause: BaseException, tx_hash: Optional[str] = None):
        self.stage = stage
        self.cause = cause
        self.tx_hash = tx_hash
        super().__init__(self._format())

    def _format(self) -> str:
        label = getattr(self.stage, "label", str(self.stage))
        if self.tx_hash:
            return f"{label} (txn {self.tx_hash}) failed with error: {self.cause}"
        return f"{label} failed with error: {self.cause}"
