"""
Signing identities and address parsing.

Both fail fast with ConfigError so that malformed secrets are caught before
any chain interaction.
"""
import logging
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from distributor.errors import ConfigError

logger = logging.getLogger(__name__)


class SigningIdentity:
    """A private key and the address derived from it."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @classmethod
    def from_private_key(cls, private_key: str, name: str = "private key") -> "SigningIdentity":
        """
        Build an identity from a hex encoded private key.

        Args:
            private_key: 32-byte key as hex, with or without 0x prefix
            name: Setting name used in the error message

        Raises:
            ConfigError: If the key cannot be parsed
        """
        if not private_key:
            raise ConfigError(f"{name} is empty")
        try:
            account = Account.from_key(private_key.strip())
        except Exception as e:
            # Do not echo the key itself
            raise ConfigError(f"Failed to parse {name}: {type(e).__name__}") from e
        return cls(account)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, tx: Dict[str, Any]) -> bytes:
        """Sign a transaction dict and return the raw encoded transaction."""
        signed = self._account.sign_transaction(tx)
        return bytes(signed.raw_transaction)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SigningIdentity) and other.address == self.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __repr__(self) -> str:
        return f"SigningIdentity(address={self.address})"


def parse_address(value: str, name: str = "address") -> str:
    """
    Validate an address and return its checksum form.

    Raises:
        ConfigError: If the value is not a valid address
    """
    if not value or not Web3.is_address(value.strip()):
        raise ConfigError(f"Invalid {name}: {value!r}")
    return Web3.to_checksum_address(value.strip())
