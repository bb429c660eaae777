"""
System Check Script
Verifies configuration, credentials and node connectivity before deploying
"""

import os
import sys
from loguru import logger
from dotenv import load_dotenv

from blockchain import ContractCompiler, ContractManager
from utils import RPCManager, load_deploy_config, get_network_profile
from utils.config_loader import DEFAULT_CONFIG_PATH
from wallet import WalletManager

load_dotenv()


class SystemChecker:
    """
    Runs independent preflight checks against one network profile
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, network: str = None):
        self.config_path = config_path
        self.network = network

        self.config = None
        self.profile = None
        self.w3 = None

    def check_configuration_file(self):
        """Check that the deployment config loads and the network resolves"""
        logger.info("Checking configuration file...")

        self.config = load_deploy_config(self.config_path)
        self.profile = get_network_profile(self.config, self.network)

        logger.success(f"  ✓ {self.config_path} (network: {self.profile['name']})")
        return True

    def check_credentials(self):
        """Check that configured private keys parse"""
        logger.info("Checking credentials...")

        if self.profile is None:
            logger.warning("  No network profile - skipping")
            return False

        accounts_env = self.profile['accounts_env']

        if not os.getenv(accounts_env):
            logger.warning(f"  {accounts_env} not set - node-managed accounts will be used")
            return True

        wallet_manager = WalletManager(self.profile)
        logger.success(f"  ✓ {len(wallet_manager.signers)} key(s) in {accounts_env}")
        return True

    def check_rpc_connection(self):
        """Check the node endpoint answers"""
        logger.info("Checking RPC connection...")

        if self.profile is None:
            logger.warning("  No network profile - skipping")
            return False

        rpc_manager = RPCManager(self.profile)
        status = rpc_manager.get_status()
        self.w3 = rpc_manager.get_web3()

        logger.success(
            f"  ✓ {status['network']}: chain id {status['chain_id']}, block {status['block_number']}"
        )
        return True

    def check_signer_balances(self):
        """Check the deployer has funds"""
        logger.info("Checking signer balances...")

        if self.w3 is None:
            logger.warning("  No RPC connection - skipping")
            return False

        wallet_manager = WalletManager(self.profile)
        deployer = wallet_manager.get_signer(self.w3)
        balance = wallet_manager.get_balance(self.w3, deployer)

        logger.info(f"  Deployer {deployer.address}: {balance:.4f} ETH")

        if balance <= 0:
            logger.error("  ✗ Deployer has no balance")
            return False

        logger.success("  ✓ Deployer balance sufficient")
        return True

    def check_artifact(self):
        """Check that an artifact or contract source is available"""
        logger.info("Checking contract artifact...")

        if self.config is None:
            return False

        compiler = ContractCompiler(self.config)
        contract_name = self.config['contract_name']

        artifact_path = compiler.artifact_path(contract_name)
        source_path = compiler.source_path(contract_name)

        if os.path.exists(artifact_path):
            logger.success(f"  ✓ {artifact_path}")
            return True

        if os.path.exists(source_path):
            logger.success(f"  ✓ {source_path} (will compile with solc {compiler.solc_version})")
            return True

        logger.error(f"  ✗ Neither {artifact_path} nor {source_path} found")
        logger.info("  Run 'npx hardhat compile' or add the contract source")
        return False

    def check_existing_deployment(self):
        """Check an existing deployment, if one is configured"""
        logger.info("Checking existing deployment...")

        contract_address = os.getenv('HEALTHCARE_CONTRACT_ADDRESS')

        if not contract_address:
            logger.info("  HEALTHCARE_CONTRACT_ADDRESS not set - skipping")
            return True

        if self.w3 is None:
            logger.warning("  No RPC connection - skipping")
            return False

        contract_manager = ContractManager(self.w3, contract_address)

        if not contract_manager.has_code():
            logger.error(f"  ✗ No contract at {contract_address}")
            return False

        logger.success(f"  ✓ Contract deployed at {contract_address}")
        return True

    def run(self):
        """
        Run all checks

        Returns:
            List of (name, passed) tuples
        """
        checks = [
            ("Configuration File", self.check_configuration_file),
            ("Credentials", self.check_credentials),
            ("RPC Connection", self.check_rpc_connection),
            ("Signer Balances", self.check_signer_balances),
            ("Contract Artifact", self.check_artifact),
            ("Existing Deployment", self.check_existing_deployment)
        ]

        results = []

        for name, check_func in checks:
            logger.info("")
            try:
                result = check_func()
                results.append((name, result))
            except Exception as e:
                logger.error(f"Error in {name}: {e}")
                results.append((name, False))

        return results


def main(config_path: str = DEFAULT_CONFIG_PATH, network: str = None) -> int:
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info("Healthcare Deployment System Check")
    logger.info("=" * 70)

    results = SystemChecker(config_path, network).run()

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("✅ Ready to deploy: python deploy.py")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
