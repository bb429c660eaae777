"""
Contract Compiler
Provides the deployable artifact (ABI + bytecode) for a contract
"""

import os
import copy
import json
from typing import Dict, List
from loguru import logger
from solcx import compile_standard, install_solc, get_installed_solc_versions


class ArtifactNotFoundError(FileNotFoundError):
    """Neither a compiled artifact nor the contract source is available"""


class CompiledArtifact:
    """
    Deployable contract build output
    """

    def __init__(self, contract_name: str, abi: List[Dict], bytecode: str, source: str):
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode if bytecode.startswith('0x') else '0x' + bytecode
        self.source = source

        if self.bytecode == '0x':
            raise ArtifactNotFoundError(
                f"{contract_name} has empty bytecode (abstract contract or interface?)"
            )

    def __repr__(self):
        return f"CompiledArtifact({self.contract_name}, {len(self.bytecode) // 2 - 1} bytes, from {self.source})"


class ContractCompiler:
    """
    Resolves build artifacts for contracts

    Hardhat artifacts (artifacts/contracts/<Name>.sol/<Name>.json) are used
    when present, otherwise contracts/<Name>.sol is compiled with solc.
    """

    def __init__(self, config: Dict):
        """
        Initialize Contract Compiler

        Args:
            config: Deployment configuration
        """
        self.artifacts_dir = config['artifacts_dir']
        self.contracts_dir = config['contracts_dir']
        self.solc_version = config['compiler']['version']
        self.settings = config['compiler'].get('settings', {})

    def artifact_path(self, contract_name: str) -> str:
        return os.path.join(
            self.artifacts_dir, 'contracts', f"{contract_name}.sol", f"{contract_name}.json"
        )

    def source_path(self, contract_name: str) -> str:
        return os.path.join(self.contracts_dir, f"{contract_name}.sol")

    def get_artifact(self, contract_name: str) -> CompiledArtifact:
        """
        Get the deployable artifact for a contract

        Args:
            contract_name: Contract name (file and contract share the name)

        Returns:
            CompiledArtifact
        """
        artifact_path = self.artifact_path(contract_name)

        if os.path.exists(artifact_path):
            return self.load_artifact(artifact_path, contract_name)

        source_path = self.source_path(contract_name)

        if os.path.exists(source_path):
            return self.compile(source_path, contract_name)

        raise ArtifactNotFoundError(
            f"No artifact at {artifact_path} and no source at {source_path} "
            f"(run 'npx hardhat compile' or add the contract source)"
        )

    def load_artifact(self, artifact_path: str, contract_name: str) -> CompiledArtifact:
        """Load a Hardhat artifact JSON"""
        with open(artifact_path, 'r') as f:
            contract_json = json.load(f)

        if 'abi' not in contract_json or 'bytecode' not in contract_json:
            raise ArtifactNotFoundError(f"Artifact {artifact_path} lacks abi/bytecode")

        logger.info(f"Loaded artifact: {artifact_path}")

        return CompiledArtifact(
            contract_name,
            contract_json['abi'],
            contract_json['bytecode'],
            artifact_path
        )

    def build_standard_input(self, source_name: str, source: str) -> Dict:
        """
        Build solc standard-JSON input from the configured settings

        The ABI is always added to the output selection.
        """
        settings = copy.deepcopy(self.settings)
        selection = settings.setdefault('outputSelection', {'*': {'*': []}})

        for file_selection in selection.values():
            for outputs in file_selection.values():
                if 'abi' not in outputs:
                    outputs.append('abi')

        return {
            'language': 'Solidity',
            'sources': {source_name: {'content': source}},
            'settings': settings
        }

    def ensure_solc(self):
        """Install the pinned solc version if missing"""
        installed = [str(version) for version in get_installed_solc_versions()]

        if self.solc_version not in installed:
            logger.info(f"Installing solc {self.solc_version}...")
            install_solc(self.solc_version)

    def compile(self, source_path: str, contract_name: str) -> CompiledArtifact:
        """
        Compile a Solidity source file

        Args:
            source_path: Path to <Name>.sol
            contract_name: Contract to extract from the output

        Returns:
            CompiledArtifact
        """
        with open(source_path, 'r') as f:
            source = f.read()

        source_name = os.path.basename(source_path)

        self.ensure_solc()

        logger.info(f"Compiling {source_path} with solc {self.solc_version}...")

        compiled = compile_standard(
            self.build_standard_input(source_name, source),
            solc_version=self.solc_version,
            base_path=os.path.abspath(self.contracts_dir),
            allow_paths=[os.path.abspath(self.contracts_dir)]
        )

        try:
            contract_data = compiled['contracts'][source_name][contract_name]
        except KeyError:
            raise ArtifactNotFoundError(
                f"Contract {contract_name} not found in {source_path}"
            ) from None

        return CompiledArtifact(
            contract_name,
            contract_data['abi'],
            contract_data['evm']['bytecode']['object'],
            source_path
        )
