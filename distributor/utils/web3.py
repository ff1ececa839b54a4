import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.contract import AsyncContract

logger = logging.getLogger(__name__)

DEFAULT_ABI_PATH = Path(__file__).parent / "abis"

# Reuse one Web3 instance per RPC endpoint to avoid 429 (too many requests) on public RPCs
_web3_cache: Dict[str, "AsyncWeb3Helper"] = {}


class AsyncWeb3Helper:
    """Class acting as web3 base class"""

    def __init__(self) -> None:
        """Initialize web3 helper"""
        self.web3: Optional[AsyncWeb3] = None

    @classmethod
    def make_web3(cls, rpc_url: str) -> "AsyncWeb3Helper":
        if not rpc_url:
            raise ValueError("Empty RPC url")
        if rpc_url in _web3_cache:
            return _web3_cache[rpc_url]
        instance = AsyncWeb3Helper()
        instance.web3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        _web3_cache[rpc_url] = instance
        logger.debug("Created cached AsyncWeb3Helper for rpc_url=%s", rpc_url)
        return instance

    @staticmethod
    def load_abi(path: Path) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """Load an ABI file"""
        if not path.is_file():
            raise ValueError(f"Invalid ABI file path {path}")

        with open(path, "r") as f:
            abi_data = json.load(f)
            if isinstance(abi_data, dict):
                return abi_data.get("abi", abi_data)
            return abi_data

    def make_contract(self, abi_path: Path, addr: str) -> AsyncContract:
        """Make a contract object"""
        if self.web3 is None:
            raise ValueError("Web3 not initialized")
        abi = self.load_abi(abi_path)
        contract = self.web3.eth.contract(address=Web3.to_checksum_address(addr), abi=abi)
        return contract

    def make_contract_by_name(self, name: str, addr: str) -> AsyncContract:
        """Make a contract object"""
        abi_path = DEFAULT_ABI_PATH / f"{name}.json"
        contract = self.make_contract(abi_path, addr)
        return contract
