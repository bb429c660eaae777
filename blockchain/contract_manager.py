"""
Contract Manager
Read access to a deployed Healthcare contract
"""

from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .user_record import UserRecord


class ContractManager:
    """
    Wraps a deployed Healthcare contract instance
    """

    def __init__(self, w3: Web3, address: str, abi: Optional[List[Dict]] = None):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            address: Deployed contract address
            abi: Contract ABI (None = minimal getUser ABI)
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)

        if abi is None:
            logger.debug("No ABI supplied - using minimal Healthcare ABI")
            abi = self._get_minimal_healthcare_abi()

        self.contract = self.w3.eth.contract(address=self.address, abi=abi)

        logger.debug(f"Healthcare contract loaded at {self.address}")

    def get_user(self, user_address: str) -> UserRecord:
        """
        Fetch a user record (read-only call)

        Args:
            user_address: Account to look up

        Returns:
            UserRecord
        """
        result = self.contract.functions.getUser(
            Web3.to_checksum_address(user_address)
        ).call()

        return UserRecord.from_call_result(result)

    def has_code(self) -> bool:
        """Check that bytecode exists at the contract address"""
        code = self.w3.eth.get_code(self.address)
        return len(code) > 0

    def _get_minimal_healthcare_abi(self) -> List[Dict]:
        """
        Get minimal ABI for the Healthcare contract
        Used when compiled artifacts are not available
        """
        return [
            {
                "inputs": [{"name": "user", "type": "address"}],
                "name": "getUser",
                "outputs": [
                    {"name": "fullName", "type": "string"},
                    {"name": "email", "type": "string"},
                    {"name": "role", "type": "uint8"},
                    {"name": "isVerified", "type": "bool"},
                    {"name": "ipfsHash", "type": "string"}
                ],
                "stateMutability": "view",
                "type": "function"
            }
        ]
