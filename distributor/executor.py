"""
Execute a single distribution step: submit, then wait for confirmation.
"""
import logging
from typing import Callable, Optional

from distributor.cancellation import Cancellation
from distributor.chain.base import ChainClient
from distributor.errors import (
    CancelledError,
    DistributionError,
    OrchestrationError,
    SubmissionError,
)
from distributor.identity import SigningIdentity
from distributor.models import Stage, TransactionReceipt, TransactionRequest
from distributor.waiter import TransactionWaiter

logger = logging.getLogger(__name__)

ContractMethod = Callable[[SigningIdentity], TransactionRequest]


class StepExecutor:
    """Submits transfers and contract calls and waits for each to confirm."""

    def __init__(self, client: ChainClient, waiter: Optional[TransactionWaiter] = None):
        self.client = client
        self.waiter = waiter or TransactionWaiter(client)

    async def execute_transfer(
        self,
        stage: Stage,
        sender: SigningIdentity,
        to: str,
        value: int,
        gas_price: int,
        gas_limit: int,
        cancellation: Optional[Cancellation] = None,
    ) -> TransactionReceipt:
        """Transfer value from sender to `to` and wait for it."""
        request = TransactionRequest(
            sender=sender,
            to=to,
            value=value,
            gas_price=gas_price,
            gas_limit=gas_limit,
        )
        logger.info(f"{stage.label}: sending {value} wei from {sender.address} to {to}")
        return await self._submit_and_wait(stage, request, cancellation)

    async def execute_contract_call(
        self,
        stage: Stage,
        sender: SigningIdentity,
        contract_method: ContractMethod,
        cancellation: Optional[Cancellation] = None,
    ) -> TransactionReceipt:
        """Build a contract call for sender, submit it and wait for it."""
        try:
            request = contract_method(sender)
        except Exception as e:
            raise OrchestrationError(stage, SubmissionError(str(e))) from e

        logger.info(f"{stage.label}: calling {request.to} from {sender.address}")
        return await self._submit_and_wait(stage, request, cancellation)

    async def _submit_and_wait(
        self,
        stage: Stage,
        request: TransactionRequest,
        cancellation: Optional[Cancellation],
    ) -> TransactionReceipt:
        cancellation = cancellation or Cancellation()
        try:
            tx_hash = await cancellation.run(self.client.send_transaction(request))
        except CancelledError as e:
            raise OrchestrationError(stage, e) from e
        except Exception as e:
            raise OrchestrationError(stage, SubmissionError(str(e))) from e

        try:
            return await self.waiter.wait(tx_hash, cancellation)
        except DistributionError as e:
            raise OrchestrationError(stage, e, tx_hash=tx_hash) from e
