"""
Config Loader
Loads deployment configuration and applies environment overrides
"""

import os
import json
from typing import Dict, Optional
from loguru import logger
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = "config/deploy_config.json"

REQUIRED_KEYS = ['contract_name', 'default_network', 'compiler', 'networks']


class ConfigError(ValueError):
    """Raised when deployment configuration is missing or invalid"""


def load_deploy_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load deployment configuration from JSON

    Args:
        config_path: Path to deploy_config.json

    Returns:
        Configuration dict
    """
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    missing = [key for key in REQUIRED_KEYS if key not in config]
    if missing:
        raise ConfigError(f"Missing config keys in {config_path}: {', '.join(missing)}")

    if 'version' not in config['compiler']:
        raise ConfigError("compiler.version must be set")

    config.setdefault('artifacts_dir', 'artifacts')
    config.setdefault('contracts_dir', 'contracts')
    config.setdefault('deployment', {})
    config['deployment'].setdefault('gas_limit_fallback', 3000000)
    config['deployment'].setdefault('gas_buffer', 1.2)

    logger.debug(f"Loaded config from {config_path}")
    return config


def get_network_profile(config: Dict, network: Optional[str] = None) -> Dict:
    """
    Resolve the active network profile

    DEPLOY_NETWORK selects the profile and RPC_URL overrides its endpoint.

    Args:
        config: Configuration dict
        network: Profile name (None = DEPLOY_NETWORK or default_network)

    Returns:
        Profile dict with a 'name' key added
    """
    name = network or os.getenv('DEPLOY_NETWORK') or config['default_network']

    if name not in config['networks']:
        available = ', '.join(sorted(config['networks'].keys()))
        raise ConfigError(f"Unknown network '{name}' (available: {available})")

    profile = dict(config['networks'][name])
    profile['name'] = name

    rpc_override = os.getenv('RPC_URL')
    if rpc_override:
        logger.info(f"RPC_URL override: {rpc_override}")
        profile['url'] = rpc_override

    if not profile.get('url'):
        raise ConfigError(f"Network '{name}' has no url")

    profile.setdefault('accounts_env', f"{name.upper()}_PRIVATE_KEYS")
    profile.setdefault('receipt_timeout', None)

    return profile
