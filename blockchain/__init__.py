"""
Blockchain Interaction Package
Handles contract compilation, deployment, and read calls
"""

from .compiler import ContractCompiler, CompiledArtifact, ArtifactNotFoundError
from .deployer import ContractDeployer, DeploymentError
from .contract_manager import ContractManager
from .user_record import Role, UserRecord, InvalidRoleError, decode_role

__all__ = [
    'ContractCompiler',
    'CompiledArtifact',
    'ArtifactNotFoundError',
    'ContractDeployer',
    'DeploymentError',
    'ContractManager',
    'Role',
    'UserRecord',
    'InvalidRoleError',
    'decode_role'
]
