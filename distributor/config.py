"""
Distributor configuration.

Settings arrive either from the environment (optionally a .env file) or as
name/value pairs fetched from a hierarchical parameter store by the caller.
Nothing here touches process-wide state beyond reading the environment;
the resolved config is passed explicitly into the run.
"""
import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from distributor.errors import ConfigError
from distributor.identity import SigningIdentity, parse_address
from distributor.waiter import DEFAULT_POLL_INTERVAL

logger = logging.getLogger(__name__)

# Environment variable -> settings field
ENV_FIELDS = {
    "ETHEREUM_JSON_RPC_URL": "ethereum_json_rpc_url",
    "VAULT_PRIVATE_KEY": "vault_private_key",
    "TOKEN_HOLDER_PROCESSING_KEY": "token_holder_processing_key",
    "TOKEN_HOLDER_CONTRACT_ADDRESS": "token_holder_contract_address",
    "BENEFICIARY_ADDRESS": "beneficiary_address",
    "POLL_INTERVAL_SECONDS": "poll_interval_seconds",
    "DEADLINE_SECONDS": "deadline_seconds",
}


class DistributionConfig:
    """Parsed identities and addresses for one run."""

    def __init__(
        self,
        vault: SigningIdentity,
        processing: SigningIdentity,
        token_holder_contract_address: str,
        beneficiary_address: str,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL,
    ):
        self.vault = vault
        self.processing = processing
        self.token_holder_contract_address = token_holder_contract_address
        self.beneficiary_address = beneficiary_address
        self.poll_interval_seconds = poll_interval_seconds

    def __repr__(self) -> str:
        return (
            f"DistributionConfig(vault={self.vault.address}, "
            f"processing={self.processing.address}, "
            f"token_holder={self.token_holder_contract_address}, "
            f"beneficiary={self.beneficiary_address})"
        )


class DistributorSettings(BaseModel):
    """Raw settings as supplied by the environment or parameter store."""

    ethereum_json_rpc_url: str = Field(..., min_length=1, description="Ethereum JSON-RPC endpoint")
    vault_private_key: str = Field(..., repr=False, description="Vault signing key (hex)")
    token_holder_processing_key: str = Field(
        ..., repr=False, description="Processing signing key for contract calls (hex)"
    )
    token_holder_contract_address: str = Field(..., description="TokenHolderProgram address")
    beneficiary_address: str = Field(..., description="Receiver of the 2/3 share")
    poll_interval_seconds: float = Field(DEFAULT_POLL_INTERVAL, gt=0)
    deadline_seconds: Optional[float] = Field(None, gt=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "DistributorSettings":
        """
        Build settings from upper-case variable names.

        Raises:
            ConfigError: If a required setting is missing or invalid
        """
        data: Dict[str, str] = {}
        for env_name, field_name in ENV_FIELDS.items():
            value = values.get(env_name)
            if value not in (None, ""):
                data[field_name] = value

        try:
            return cls(**data)
        except ValidationError as e:
            missing = [
                name for name, field_name in ENV_FIELDS.items()
                if field_name not in data and cls.model_fields[field_name].is_required()
            ]
            if missing:
                raise ConfigError(f"Missing settings: {', '.join(missing)}") from e
            raise ConfigError(f"Invalid settings: {e}") from e

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "DistributorSettings":
        """Load settings from the environment, after loading a .env file if present."""
        load_dotenv(env_file)
        return cls.from_mapping(os.environ)

    @classmethod
    def from_parameters(cls, path: str, parameters: Mapping[str, str]) -> "DistributorSettings":
        """
        Build settings from parameters fetched by path from a parameter store.

        Each name has the path prefix stripped and is upper-cased, so
        "/distributor/prod/vault_private_key" under path "/distributor/prod/"
        becomes VAULT_PRIVATE_KEY.
        """
        return cls.from_mapping(normalize_parameters(path, parameters))

    def resolve(self) -> DistributionConfig:
        """
        Parse keys and addresses.

        Raises:
            ConfigError: If any key or address is malformed
        """
        config = DistributionConfig(
            vault=SigningIdentity.from_private_key(self.vault_private_key, "vault private key"),
            processing=SigningIdentity.from_private_key(
                self.token_holder_processing_key, "token holder processing key"
            ),
            token_holder_contract_address=parse_address(
                self.token_holder_contract_address, "token holder contract address"
            ),
            beneficiary_address=parse_address(self.beneficiary_address, "beneficiary address"),
            poll_interval_seconds=self.poll_interval_seconds,
        )
        logger.info(f"Resolved {config!r}")
        return config


def normalize_parameters(path: str, parameters: Mapping[str, str]) -> Dict[str, str]:
    """Strip the path prefix from parameter names and upper-case them."""
    normalized = {}
    for name, value in parameters.items():
        if name.startswith(path):
            name = name[len(path):]
        name = name.lstrip("/").upper()
        normalized[name] = value
        logger.info(f"Loaded parameter: {name}")
    return normalized
