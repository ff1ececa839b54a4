"""
Chain client interface used by the distributor.
"""
from abc import ABC, abstractmethod

from distributor.models import TransactionReceipt, TransactionRequest


class ChainClient(ABC):
    """
    Narrow view of an Ethereum node.

    Backends without real block production (simulated chains) set
    supports_manual_commit and implement commit(); the waiter then mines
    explicitly instead of polling.
    """

    supports_manual_commit: bool = False

    @abstractmethod
    async def suggest_gas_price(self) -> int:
        """Current suggested gas price in wei."""

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Balance of address in wei at the latest block."""

    @abstractmethod
    async def send_transaction(self, request: TransactionRequest) -> str:
        """Sign and submit a transaction. Returns the 0x-prefixed hash."""

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        """
        Receipt of a mined transaction.

        Raises:
            TransactionNotFound: While the transaction is not mined yet
        """

    async def commit(self) -> None:
        """
        Mine pending transactions.

        Only called by the waiter when supports_manual_commit is set; polling
        backends keep this default.
        """
        raise NotImplementedError(f"{type(self).__name__} does not support manual commit")
