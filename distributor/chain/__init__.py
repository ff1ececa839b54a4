"""
Chain clients.

- base: ChainClient interface
- web3_client: JSON-RPC node via web3.py
- simulated: in-memory chain with manual commit, for tests and dry runs
"""
from distributor.chain.base import ChainClient
from distributor.chain.simulated import SimulatedChainClient
from distributor.chain.web3_client import Web3ChainClient

__all__ = [
    "ChainClient",
    "SimulatedChainClient",
    "Web3ChainClient",
]
