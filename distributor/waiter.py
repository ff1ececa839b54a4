"""
Wait for a submitted transaction to be confirmed.
"""
import logging
from typing import Optional

from distributor.cancellation import Cancellation
from distributor.chain.base import ChainClient
from distributor.errors import (
    CancelledError,
    ChainError,
    ReceiptFailed,
    TransactionNotFound,
)
from distributor.models import TransactionReceipt

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 4.0


class TransactionWaiter:
    """
    Polls a chain client for a transaction receipt.

    Against a manual-commit backend the waiter commits once and checks the
    receipt a single time instead of polling.
    """

    def __init__(self, client: ChainClient, poll_interval: float = DEFAULT_POLL_INTERVAL):
        self.client = client
        self.poll_interval = poll_interval
        self.manual_commit = bool(client.supports_manual_commit)

    async def wait(
        self, tx_hash: str, cancellation: Optional[Cancellation] = None
    ) -> TransactionReceipt:
        """
        Wait until tx_hash is mined.

        Args:
            tx_hash: Hash returned on submission
            cancellation: Signal checked every iteration and during sleeps

        Returns:
            Receipt of the successful transaction

        Raises:
            ReceiptFailed: Transaction mined with a non-success status
            ChainError: Receipt query failed with anything but not-found
            CancelledError: Cancelled or deadline passed before confirmation
        """
        cancellation = cancellation or Cancellation()
        logger.info(f"Waiting for transaction: {tx_hash}")

        if self.manual_commit:
            return await self._commit_and_check(tx_hash, cancellation)

        polls = 0
        while True:
            cancellation.raise_if_cancelled()

            try:
                receipt = await cancellation.run(self.client.get_transaction_receipt(tx_hash))
            except TransactionNotFound:
                polls += 1
                logger.debug(f"Transaction {tx_hash} not found yet (poll {polls})")
                await cancellation.sleep(self.poll_interval)
                continue
            except CancelledError:
                raise
            except Exception as e:
                raise ChainError(f"Receipt query for {tx_hash} failed: {e}") from e

            return self._check(receipt)

    async def _commit_and_check(
        self, tx_hash: str, cancellation: Cancellation
    ) -> TransactionReceipt:
        cancellation.raise_if_cancelled()
        await cancellation.run(self.client.commit())
        try:
            receipt = await cancellation.run(self.client.get_transaction_receipt(tx_hash))
        except CancelledError:
            raise
        except Exception as e:
            raise ChainError(f"Receipt query for {tx_hash} failed: {e}") from e
        return self._check(receipt)

    def _check(self, receipt: TransactionReceipt) -> TransactionReceipt:
        if not receipt.succeeded:
            logger.warning(f"Transaction {receipt.tx_hash} failed with status {receipt.status}")
            raise ReceiptFailed(receipt)
        logger.info(f"Transaction {receipt.tx_hash} confirmed in block {receipt.block_number}")
        return receipt
