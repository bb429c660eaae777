"""
Utilities Package
Configuration loading and RPC connection management
"""

from .config_loader import ConfigError, load_deploy_config, get_network_profile
from .rpc_manager import RPCManager, RPCConnectionError

__all__ = [
    'ConfigError',
    'load_deploy_config',
    'get_network_profile',
    'RPCManager',
    'RPCConnectionError'
]
