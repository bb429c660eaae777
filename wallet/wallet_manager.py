"""
Wallet Manager
Provides the ordered list of deployment signers
"""

import os
from typing import Dict, List, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from utils.config_loader import ConfigError

load_dotenv()


class Signer:
    """
    An account able to authorise transactions

    Local signers carry a private key and sign transactions themselves.
    Remote signers are accounts unlocked on the node (eth_accounts).
    """

    def __init__(self, address: str, account=None):
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if not self.is_local:
            raise ValueError(f"Signer {self.address} has no local key")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def __repr__(self):
        kind = 'local' if self.is_local else 'remote'
        return f"Signer({self.address}, {kind})"


class WalletManager:
    """
    Loads signers for a network profile

    Private keys come from the environment variable named by the profile's
    'accounts_env' as a comma-separated, ordered list. When it is empty the
    node's unlocked accounts are used instead.
    """

    def __init__(self, network_profile: Dict):
        """
        Initialize wallet manager

        Args:
            network_profile: Resolved network profile
        """
        self.accounts_env = network_profile['accounts_env']
        self.signers: List[Signer] = self._load_local_signers()

        if self.signers:
            logger.info(f"Loaded {len(self.signers)} signer(s) from {self.accounts_env}")
        else:
            logger.info(f"{self.accounts_env} not set - using node-managed accounts")

    def _load_local_signers(self) -> List[Signer]:
        """Parse private keys from the environment"""
        raw_keys = os.getenv(self.accounts_env, '')
        keys = [key.strip() for key in raw_keys.split(',') if key.strip()]

        signers = []
        for index, key in enumerate(keys):
            try:
                account = Account.from_key(key)
            except Exception as e:
                # Never echo the key itself
                raise ConfigError(
                    f"Invalid private key at position {index} in {self.accounts_env}"
                ) from e

            signers.append(Signer(account.address, account))

        return signers

    def get_signers(self, w3: Optional[Web3] = None) -> List[Signer]:
        """
        Get the ordered signer list

        Args:
            w3: Web3 instance, needed only for node-managed accounts

        Returns:
            Signers in configured order
        """
        if self.signers:
            return self.signers

        if w3 is None:
            raise ValueError("Web3 instance required to list node-managed accounts")

        return [Signer(address) for address in w3.eth.accounts]

    def get_signer(self, w3: Optional[Web3] = None, index: int = 0) -> Signer:
        """
        Get a signer by position (the deployer is always index 0)

        Args:
            w3: Web3 instance
            index: Position in the ordered list

        Returns:
            Signer
        """
        signers = self.get_signers(w3)

        if not signers:
            raise ValueError(f"No accounts available ({self.accounts_env} empty and node has none)")

        if index >= len(signers):
            raise ValueError(f"Signer index {index} out of range ({len(signers)} available)")

        return signers[index]

    def get_balance(self, w3: Web3, signer: Signer) -> Decimal:
        """Get native balance of a signer in ether"""
        balance_wei = w3.eth.get_balance(signer.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))
