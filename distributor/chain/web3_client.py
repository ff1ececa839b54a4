"""
ChainClient over a JSON-RPC node using web3.py.
"""
import logging
from typing import Any, Dict

from web3 import AsyncWeb3, Web3
from web3.exceptions import TransactionNotFound as Web3TransactionNotFound

from distributor.chain.base import ChainClient
from distributor.errors import TransactionNotFound
from distributor.models import TransactionReceipt, TransactionRequest

logger = logging.getLogger(__name__)


class Web3ChainClient(ChainClient):
    """
    Chain client backed by an AsyncWeb3 instance.

    Nonces are read from the node's pending transaction count, so the
    node owns nonce sequencing between runs.
    """

    def __init__(self, w3: AsyncWeb3):
        self.w3 = w3
        self._chain_id = None

    async def suggest_gas_price(self) -> int:
        return int(await self.w3.eth.gas_price)

    async def get_balance(self, address: str) -> int:
        return int(await self.w3.eth.get_balance(Web3.to_checksum_address(address)))

    async def send_transaction(self, request: TransactionRequest) -> str:
        tx = await self._build_transaction(request)
        raw = request.sender.sign_transaction(tx)
        tx_hash = await self.w3.eth.send_raw_transaction(raw)
        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(
            f"Submitted txn {tx_hash_hex} from {request.sender.address} to {request.to} "
            f"(nonce={tx['nonce']}, value={tx['value']})"
        )
        return tx_hash_hex

    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        try:
            receipt = await self.w3.eth.get_transaction_receipt(tx_hash)
        except Web3TransactionNotFound as e:
            raise TransactionNotFound(f"Transaction {tx_hash} not found") from e

        return TransactionReceipt(
            tx_hash=tx_hash,
            status=receipt["status"],
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
        )

    async def _build_transaction(self, request: TransactionRequest) -> Dict[str, Any]:
        sender = request.sender.address
        if self._chain_id is None:
            self._chain_id = await self.w3.eth.chain_id

        tx: Dict[str, Any] = {
            "from": sender,
            "to": Web3.to_checksum_address(request.to),
            "value": request.value or 0,
            "nonce": await self.w3.eth.get_transaction_count(sender, "pending"),
            "chainId": self._chain_id,
        }
        if request.data:
            tx["data"] = request.data

        if request.gas_price is None:
            tx["gasPrice"] = await self.w3.eth.gas_price
        else:
            tx["gasPrice"] = request.gas_price

        if request.gas_limit is None:
            tx["gas"] = await self.w3.eth.estimate_gas(tx)
        else:
            tx["gas"] = request.gas_limit

        return tx
