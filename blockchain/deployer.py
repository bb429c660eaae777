"""
Contract Deployer
Deploys a compiled contract and waits for confirmation
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class DeploymentError(RuntimeError):
    """Creation transaction failed or produced no contract"""


class ContractDeployer:
    """
    Single entry point for contract creation: deploy, wait, return the address
    """

    def __init__(self, w3: Web3, deployment_config: Dict, receipt_timeout: Optional[float] = None):
        """
        Initialize Contract Deployer

        Args:
            w3: Web3 instance
            deployment_config: 'deployment' section of the config
            receipt_timeout: Seconds to wait for the receipt (None = client default)
        """
        self.w3 = w3
        self.gas_limit_fallback = deployment_config['gas_limit_fallback']
        self.gas_buffer = deployment_config['gas_buffer']
        self.receipt_timeout = receipt_timeout

    def deploy_and_wait(self, artifact, signer, *constructor_args) -> Dict:
        """
        Deploy a contract and block until the creation is mined

        Args:
            artifact: CompiledArtifact to deploy
            signer: Signer authorising the creation transaction
            constructor_args: Constructor arguments

        Returns:
            Dict with address, tx_hash, block_number, gas_used
        """
        Contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        constructor = Contract.constructor(*constructor_args)

        if signer.is_local:
            tx_hash = self._send_signed(constructor, signer)
        else:
            tx_hash = constructor.transact({'from': signer.address})

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        logger.info("Waiting for confirmation...")

        receipt = self._wait_for_receipt(tx_hash)

        if receipt['status'] != 1:
            raise DeploymentError(f"Deployment reverted (tx {Web3.to_hex(tx_hash)})")

        contract_address = receipt.get('contractAddress')

        if not contract_address:
            raise DeploymentError(f"Receipt has no contract address (tx {Web3.to_hex(tx_hash)})")

        logger.success(f"{artifact.contract_name} deployed at {contract_address}")
        logger.debug(f"Block: {receipt['blockNumber']}, gas used: {receipt['gasUsed']}")

        return {
            'address': Web3.to_checksum_address(contract_address),
            'tx_hash': Web3.to_hex(tx_hash),
            'block_number': receipt['blockNumber'],
            'gas_used': receipt['gasUsed']
        }

    def _send_signed(self, constructor, signer):
        """Build, sign and broadcast a creation transaction from a local key"""
        nonce = self.w3.eth.get_transaction_count(signer.address, 'pending')
        gas_price = self.w3.eth.gas_price
        gas_limit = self._estimate_gas(constructor, signer.address)

        logger.debug(f"Nonce: {nonce}")
        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        transaction = constructor.build_transaction({
            'from': signer.address,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.w3.eth.chain_id
        })

        signed_tx = signer.sign_transaction(transaction)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def _estimate_gas(self, constructor, from_address: str) -> int:
        """Estimate creation gas with a safety buffer"""
        try:
            gas_estimate = constructor.estimate_gas({'from': from_address})
            return int(gas_estimate * self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.gas_limit_fallback

    def _wait_for_receipt(self, tx_hash):
        if self.receipt_timeout is None:
            return self.w3.eth.wait_for_transaction_receipt(tx_hash)

        return self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
