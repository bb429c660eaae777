"""
RPC Manager
Connects to the node endpoint of the selected network profile
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class RPCConnectionError(ConnectionError):
    """Raised when the node endpoint cannot be reached"""


class RPCManager:
    """
    Owns the Web3 client for one network profile
    """

    def __init__(self, network_profile: Dict):
        """
        Initialize RPC Manager

        Args:
            network_profile: Resolved profile (name, url)
        """
        self.network_name = network_profile['name']
        self.http_url = network_profile['url']

        self.w3: Optional[Web3] = None

        logger.debug(f"RPC Manager initialized for {self.network_name} ({self.http_url})")

    def connect(self) -> Web3:
        """
        Create the Web3 client and verify the endpoint answers

        Returns:
            Connected Web3 instance
        """
        if self.w3 is not None:
            return self.w3

        w3 = Web3(Web3.HTTPProvider(self.http_url))

        if not w3.is_connected():
            raise RPCConnectionError(
                f"Failed to connect to {self.network_name} at {self.http_url}"
            )

        logger.success(f"Connected to {self.network_name} (chain id {w3.eth.chain_id})")

        self.w3 = w3
        return w3

    def get_web3(self) -> Web3:
        """Get the connected Web3 instance, connecting on first use"""
        return self.connect()

    def get_status(self) -> Dict:
        """
        Get basic node status

        Returns:
            Dict with chain_id and latest block number
        """
        w3 = self.get_web3()

        return {
            'network': self.network_name,
            'url': self.http_url,
            'chain_id': w3.eth.chain_id,
            'block_number': w3.eth.block_number
        }
