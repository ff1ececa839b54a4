"""
Distribution orchestrator.

Runs the distribution stages strictly in order:

1. Fetch suggested gas price
2. Read vault balance
3. Reserve transfer fees and split the rest 1/3 : 2/3
4. Transfer 1/3 to the token holder contract
5. Transfer 2/3 to the beneficiary
6. sellVouchers() on the token holder contract
7. buyVouchers() on the token holder contract

Every stage waits for the previous one. The first failure ends the run.
Transfers confirmed before a failure are not rolled back; their hashes are
logged so the partial distribution can be reconciled by hand.
"""
import logging
from typing import List, Optional

from distributor.cancellation import Cancellation
from distributor.chain.base import ChainClient
from distributor.config import DistributionConfig
from distributor.contracts.token_holder import TokenHolderContract
from distributor.errors import (
    CancelledError,
    ChainQueryError,
    InsufficientFunds,
    OrchestrationError,
)
from distributor.executor import StepExecutor
from distributor.models import (
    TRANSFER_GAS_LIMIT,
    DistributionResult,
    GasEstimate,
    SplitResult,
    Stage,
)
from distributor.splitter import compute_distribution
from distributor.waiter import TransactionWaiter

logger = logging.getLogger(__name__)


class Orchestrator:
    """Sequences one vault distribution run."""

    def __init__(
        self,
        client: ChainClient,
        token_holder: TokenHolderContract,
        config: DistributionConfig,
        executor: Optional[StepExecutor] = None,
        gas_limit: int = TRANSFER_GAS_LIMIT,
    ):
        """
        Args:
            client: Chain client used for queries and submissions
            token_holder: Binding for the token holder contract
            config: Resolved identities and addresses
            executor: Step executor; built from client when omitted
            gas_limit: Gas limit of each vault transfer
        """
        self.client = client
        self.token_holder = token_holder
        self.config = config
        self.gas_limit = gas_limit
        self.executor = executor or StepExecutor(
            client,
            TransactionWaiter(client, poll_interval=config.poll_interval_seconds),
        )

    async def run(self, event_time: str, cancellation: Optional[Cancellation] = None) -> str:
        """
        Run the distribution and return the success message.

        Raises:
            OrchestrationError: Naming the failed stage and its cause
        """
        result = await self.distribute(event_time, cancellation)
        return result.message

    async def distribute(
        self, event_time: str, cancellation: Optional[Cancellation] = None
    ) -> DistributionResult:
        """Run the distribution and return amounts and transaction hashes."""
        cancellation = cancellation or Cancellation()
        vault = self.config.vault
        processing = self.config.processing
        confirmed: List[str] = []

        logger.info(f"Starting distribution for event at {event_time}")

        gas = GasEstimate(gas_price=await self._suggest_gas_price(cancellation), gas_limit=self.gas_limit)
        balance = await self._vault_balance(vault.address, cancellation)
        split = self._split(balance, gas)

        logger.info(
            f"Vault {vault.address} balance={balance}, fee_reserve={gas.fee_reserve}, "
            f"token_holder_share={split.primary_share}, "
            f"beneficiary_share={split.secondary_share}"
        )

        try:
            receipt = await self.executor.execute_transfer(
                Stage.TOKEN_HOLDER_TRANSFER,
                vault,
                self.config.token_holder_contract_address,
                split.primary_share,
                gas.gas_price,
                gas.gas_limit,
                cancellation,
            )
            confirmed.append(receipt.tx_hash)

            receipt = await self.executor.execute_transfer(
                Stage.BENEFICIARY_TRANSFER,
                vault,
                self.config.beneficiary_address,
                split.secondary_share,
                gas.gas_price,
                gas.gas_limit,
                cancellation,
            )
            confirmed.append(receipt.tx_hash)

            receipt = await self.executor.execute_contract_call(
                Stage.SELL_VOUCHERS,
                processing,
                self.token_holder.sell_vouchers,
                cancellation,
            )
            confirmed.append(receipt.tx_hash)

            receipt = await self.executor.execute_contract_call(
                Stage.BUY_VOUCHERS,
                processing,
                self.token_holder.buy_vouchers,
                cancellation,
            )
            confirmed.append(receipt.tx_hash)
        except OrchestrationError as e:
            if confirmed:
                logger.error(
                    f"Distribution stopped at {e.stage.value} after confirmed txns "
                    f"{confirmed}; vault is partially distributed"
                )
            raise

        logger.info(f"Distribution for event at {event_time} completed: {confirmed}")
        return DistributionResult(event_time=event_time, gas=gas, split=split, tx_hashes=confirmed)

    async def _suggest_gas_price(self, cancellation: Cancellation) -> int:
        try:
            return await cancellation.run(self.client.suggest_gas_price())
        except CancelledError as e:
            raise OrchestrationError(Stage.GAS_PRICE, e) from e
        except Exception as e:
            raise OrchestrationError(Stage.GAS_PRICE, ChainQueryError(str(e))) from e

    async def _vault_balance(self, address: str, cancellation: Cancellation) -> int:
        try:
            return await cancellation.run(self.client.get_balance(address))
        except CancelledError as e:
            raise OrchestrationError(Stage.VAULT_BALANCE, e) from e
        except Exception as e:
            raise OrchestrationError(Stage.VAULT_BALANCE, ChainQueryError(str(e))) from e

    def _split(self, balance: int, gas: GasEstimate) -> SplitResult:
        try:
            return compute_distribution(balance, gas.gas_price, gas.gas_limit)
        except InsufficientFunds as e:
            raise OrchestrationError(Stage.SPLIT, e) from e
