"""
Binding for the TokenHolderProgram contract.

Only encodes calls; submission and gas are left to the chain client.
"""
import logging

from web3 import Web3
from web3.contract import AsyncContract

from distributor.identity import SigningIdentity
from distributor.models import TransactionRequest
from distributor.utils.web3 import AsyncWeb3Helper

logger = logging.getLogger(__name__)

CONTRACT_NAME = "TokenHolderProgram"


class TokenHolderContract:
    """TokenHolderProgram at a fixed address."""

    def __init__(self, address: str, web3_helper: AsyncWeb3Helper):
        self.contract: AsyncContract = web3_helper.make_contract_by_name(
            name=CONTRACT_NAME,
            addr=address,
        )
        logger.info(f"Loaded token holder contract at {self.contract.address}")

    @property
    def address(self) -> str:
        return self.contract.address

    def sell_vouchers(self, sender: SigningIdentity) -> TransactionRequest:
        return self._call(sender, "sellVouchers")

    def buy_vouchers(self, sender: SigningIdentity) -> TransactionRequest:
        return self._call(sender, "buyVouchers")

    def _call(self, sender: SigningIdentity, fn_name: str) -> TransactionRequest:
        data = self.contract.encode_abi(fn_name)
        return TransactionRequest(
            sender=sender,
            to=Web3.to_checksum_address(self.address),
            value=0,
            data=data,
        )
