"""
Deterministic in-memory chain for tests and dry runs.

Nothing is mined until commit() is called, so the waiter uses the
manual-commit path against this backend.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from web3 import Web3

from distributor.chain.base import ChainClient
from distributor.errors import TransactionNotFound
from distributor.models import (
    RECEIPT_STATUS_SUCCESSFUL,
    TRANSFER_GAS_LIMIT,
    TransactionReceipt,
    TransactionRequest,
)

logger = logging.getLogger(__name__)

RECEIPT_STATUS_FAILED = 0
DEFAULT_CALL_GAS = 50_000


class SimulatedChainClient(ChainClient):
    """In-memory balances, explicit block production."""

    supports_manual_commit = True

    def __init__(
        self,
        balances: Optional[Dict[str, int]] = None,
        gas_price: int = 1,
        reverting_calls: Iterable[str] = (),
    ):
        """
        Args:
            balances: Initial balances by address in wei
            gas_price: Gas price returned by suggest_gas_price
            reverting_calls: Call data payloads whose transactions revert when mined
        """
        self.balances: Dict[str, int] = {
            Web3.to_checksum_address(addr): amount for addr, amount in (balances or {}).items()
        }
        self.gas_price = gas_price
        self.reverting_calls = {data.lower() for data in reverting_calls}
        self.block_number = 0
        self.nonces: Dict[str, int] = {}
        self.pending: List[Tuple[str, TransactionRequest]] = []
        self.receipts: Dict[str, TransactionReceipt] = {}
        self.sent: List[TransactionRequest] = []
        self.receipt_queries: List[str] = []
        self.commits = 0

    def balance_of(self, address: str) -> int:
        return self.balances.get(Web3.to_checksum_address(address), 0)

    async def suggest_gas_price(self) -> int:
        return self.gas_price

    async def get_balance(self, address: str) -> int:
        return self.balance_of(address)

    async def send_transaction(self, request: TransactionRequest) -> str:
        sender = request.sender.address
        nonce = self.nonces.get(sender, 0)
        self.nonces[sender] = nonce + 1

        tx_hash = Web3.to_hex(Web3.keccak(text=f"{sender}:{nonce}"))
        self.pending.append((tx_hash, request))
        self.sent.append(request)
        logger.debug(f"Queued simulated txn {tx_hash} from {sender} (nonce={nonce})")
        return tx_hash

    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        self.receipt_queries.append(tx_hash)
        if tx_hash not in self.receipts:
            raise TransactionNotFound(f"Transaction {tx_hash} not found")
        return self.receipts[tx_hash]

    async def commit(self) -> None:
        self.commits += 1
        if not self.pending:
            return
        self.block_number += 1
        for tx_hash, request in self.pending:
            self.receipts[tx_hash] = self._apply(tx_hash, request)
        self.pending = []

    def _apply(self, tx_hash: str, request: TransactionRequest) -> TransactionReceipt:
        sender = request.sender.address
        to = Web3.to_checksum_address(request.to)
        value = request.value or 0
        gas_used = request.gas_limit or (DEFAULT_CALL_GAS if request.data else TRANSFER_GAS_LIMIT)
        gas_price = self.gas_price if request.gas_price is None else request.gas_price
        fee = gas_used * gas_price
        balance = self.balance_of(sender)

        status = RECEIPT_STATUS_SUCCESSFUL
        if request.data and request.data.lower() in self.reverting_calls:
            status = RECEIPT_STATUS_FAILED
        elif balance < value + fee:
            status = RECEIPT_STATUS_FAILED

        if status == RECEIPT_STATUS_SUCCESSFUL:
            self.balances[sender] = balance - value - fee
            self.balances[to] = self.balance_of(to) + value
        else:
            self.balances[sender] = max(0, balance - fee)

        return TransactionReceipt(
            tx_hash=tx_hash,
            status=status,
            block_number=self.block_number,
            gas_used=gas_used,
        )
