"""
Data models for the token holder distributor.

Amounts are integers in wei throughout. Models are frozen once built.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from distributor.identity import SigningIdentity

RECEIPT_STATUS_SUCCESSFUL = 1

# Fee reserve covers this many transfer transactions
FEE_RESERVE_TRANSACTIONS = 2

# Vault balance is split into SPLIT_DENOMINATOR parts
SPLIT_DENOMINATOR = 3
PRIMARY_PARTS = 1
SECONDARY_PARTS = 2

TRANSFER_GAS_LIMIT = 21000


class Stage(str, Enum):
    """Distribution stages in execution order."""

    CONFIG = "config"
    GAS_PRICE = "gas_price"
    VAULT_BALANCE = "vault_balance"
    SPLIT = "split"
    TOKEN_HOLDER_TRANSFER = "token_holder_transfer"
    BENEFICIARY_TRANSFER = "beneficiary_transfer"
    SELL_VOUCHERS = "sell_vouchers"
    BUY_VOUCHERS = "buy_vouchers"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    Stage.CONFIG: "Parsing distributor configuration",
    Stage.GAS_PRICE: "Fetching gas price from ethereum client",
    Stage.VAULT_BALANCE: "Fetching vault balance",
    Stage.SPLIT: "Splitting vault balance",
    Stage.TOKEN_HOLDER_TRANSFER: "Fund transfer to token holder contract",
    Stage.BENEFICIARY_TRANSFER: "Fund transfer to beneficiary address",
    Stage.SELL_VOUCHERS: "Sell vouchers call on token holder contract",
    Stage.BUY_VOUCHERS: "Buy vouchers call on token holder contract",
}


class GasEstimate(BaseModel):
    """Gas parameters for the two vault transfers of a run."""

    gas_price: int = Field(..., ge=0, description="Suggested gas price in wei")
    gas_limit: int = Field(TRANSFER_GAS_LIMIT, ge=0, description="Gas limit per transfer")

    model_config = ConfigDict(frozen=True)

    @property
    def fee_reserve(self) -> int:
        return self.gas_limit * FEE_RESERVE_TRANSACTIONS * self.gas_price


class SplitResult(BaseModel):
    """
    Vault balance split after the fee reserve is taken out.

    primary_share + secondary_share never exceeds net_balance; the
    truncation remainder of the division stays in the vault.
    """

    net_balance: int = Field(..., gt=0)
    primary_share: int = Field(..., ge=0)
    secondary_share: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def undistributed(self) -> int:
        return self.net_balance - self.primary_share - self.secondary_share


class TransactionRequest(BaseModel):
    """
    A transaction ready for submission.

    gas_price and gas_limit left as None are filled in by the chain client
    (suggested price, estimated gas).
    """

    sender: SigningIdentity
    to: str
    value: Optional[int] = Field(None, ge=0)
    data: Optional[str] = None
    gas_price: Optional[int] = Field(None, ge=0)
    gas_limit: Optional[int] = Field(None, ge=0)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class TransactionReceipt(BaseModel):
    """Receipt of a mined transaction."""

    tx_hash: str
    status: int
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @property
    def succeeded(self) -> bool:
        return self.status == RECEIPT_STATUS_SUCCESSFUL


class DistributionResult(BaseModel):
    """Outcome of a completed distribution run."""

    event_time: str
    gas: GasEstimate
    split: SplitResult
    tx_hashes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        return f"distribution completed at {self.event_time}"
