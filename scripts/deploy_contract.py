"""
Smart Contract Deployment Script
Deploys the Healthcare contract and reads back the deployer's user record
"""

import os
import sys
from typing import Dict, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain import ContractCompiler, ContractDeployer, ContractManager
from utils import RPCManager, load_deploy_config, get_network_profile
from utils.config_loader import DEFAULT_CONFIG_PATH
from wallet import WalletManager

load_dotenv()


def configure_logging():
    """Console sink on stderr plus a rotating debug log file"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv('LOG_LEVEL', 'INFO')
    )
    logger.add(
        "data/logs/deploy.log",
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


def deploy_contract(config_path: str = DEFAULT_CONFIG_PATH, network: Optional[str] = None) -> Dict:
    """
    Deploy the configured contract and verify it with one read call

    Prints the deployer address, the contract address and the deployer's
    user record to stdout.

    Args:
        config_path: Path to deploy_config.json
        network: Network profile name (None = DEPLOY_NETWORK or default)

    Returns:
        Dict with deployer, deployment and user
    """
    print("Deploying contract...")

    config = load_deploy_config(config_path)
    profile = get_network_profile(config, network)

    rpc_manager = RPCManager(profile)
    w3 = rpc_manager.connect()

    # Deployer is always the first configured account
    wallet_manager = WalletManager(profile)
    deployer = wallet_manager.get_signer(w3, index=0)
    print("Deployer address:", deployer.address)

    compiler = ContractCompiler(config)
    artifact = compiler.get_artifact(config['contract_name'])

    contract_deployer = ContractDeployer(w3, config['deployment'], profile['receipt_timeout'])
    deployment = contract_deployer.deploy_and_wait(artifact, deployer)
    print("Contract address:", deployment['address'])

    # Deployer is the default admin
    contract_manager = ContractManager(w3, deployment['address'], artifact.abi)
    user = contract_manager.get_user(deployer.address)

    print("User info:")
    for line in user.format_lines():
        print(line)

    return {
        'deployer': deployer.address,
        'deployment': deployment,
        'user': user
    }


def main(config_path: str = DEFAULT_CONFIG_PATH, network: Optional[str] = None) -> int:
    """
    Run the deployment

    Returns:
        Process exit code (0 on success, 1 on any failure)
    """
    try:
        deploy_contract(config_path, network)
    except Exception as e:
        logger.error(f"Deployment failed: {type(e).__name__}: {e}")
        logger.opt(exception=e).debug("Traceback")
        return 1

    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
