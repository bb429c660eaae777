"""
Wallet Package
Signer selection for deployments
"""

from .wallet_manager import WalletManager, Signer

__all__ = ['WalletManager', 'Signer']
