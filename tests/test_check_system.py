"""
Unit Tests for the Preflight System Check
"""

import json
import pytest
from unittest.mock import Mock, patch
from decimal import Decimal

from scripts import check_system
from scripts.check_system import SystemChecker


DEV_KEY_0 = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
CONTRACT_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'


@pytest.fixture
def config_file(tmp_path):
    config = {
        'contract_name': 'Healthcare',
        'artifacts_dir': str(tmp_path / 'artifacts'),
        'contracts_dir': str(tmp_path / 'contracts'),
        'default_network': 'ganache',
        'compiler': {'version': '0.8.28', 'settings': {}},
        'networks': {
            'ganache': {'url': 'http://127.0.0.1:7545', 'accounts_env': 'GANACHE_PRIVATE_KEYS'}
        }
    }

    contracts_dir = tmp_path / 'contracts'
    contracts_dir.mkdir()
    (contracts_dir / 'Healthcare.sol').write_text("contract Healthcare {}\n")

    path = tmp_path / 'deploy_config.json'
    path.write_text(json.dumps(config))
    return str(path)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ('DEPLOY_NETWORK', 'RPC_URL', 'GANACHE_PRIVATE_KEYS', 'HEALTHCARE_CONTRACT_ADDRESS'):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def rpc_manager():
    """Mock RPC Manager for a healthy node"""
    w3 = Mock()
    w3.eth.get_balance.return_value = 10 ** 20
    w3.from_wei.return_value = Decimal('100')
    w3.eth.get_code.return_value = b'\x60\x80'

    manager = Mock()
    manager.get_web3.return_value = w3
    manager.get_status.return_value = {
        'network': 'ganache',
        'url': 'http://127.0.0.1:7545',
        'chain_id': 1337,
        'block_number': 12
    }
    return manager


def run_checks(config_file, rpc_manager):
    with patch.object(check_system, 'RPCManager', return_value=rpc_manager):
        return dict(SystemChecker(config_file).run())


class TestSystemChecker:

    def test_all_checks_pass(self, config_file, clean_env, rpc_manager):
        clean_env.setenv('GANACHE_PRIVATE_KEYS', DEV_KEY_0)
        clean_env.setenv('HEALTHCARE_CONTRACT_ADDRESS', CONTRACT_ADDRESS)

        results = run_checks(config_file, rpc_manager)

        assert all(results.values()), results

    def test_malformed_key(self, config_file, clean_env, rpc_manager):
        clean_env.setenv('GANACHE_PRIVATE_KEYS', '0xdeadbeef')

        results = run_checks(config_file, rpc_manager)

        assert results['Credentials'] is False
        assert results['Configuration File'] is True

    def test_unfunded_deployer(self, config_file, clean_env, rpc_manager):
        clean_env.setenv('GANACHE_PRIVATE_KEYS', DEV_KEY_0)
        w3 = rpc_manager.get_web3.return_value
        w3.eth.get_balance.return_value = 0
        w3.from_wei.return_value = Decimal('0')

        results = run_checks(config_file, rpc_manager)

        assert results['Signer Balances'] is False

    def test_rpc_failure_skips_dependent_checks(self, config_file, clean_env, rpc_manager):
        rpc_manager.get_status.side_effect = ConnectionError("refused")

        results = run_checks(config_file, rpc_manager)

        assert results['RPC Connection'] is False
        assert results['Signer Balances'] is False
        assert results['Configuration File'] is True

    def test_missing_deployment(self, config_file, clean_env, rpc_manager):
        clean_env.setenv('HEALTHCARE_CONTRACT_ADDRESS', CONTRACT_ADDRESS)
        rpc_manager.get_web3.return_value.eth.get_code.return_value = b''

        results = run_checks(config_file, rpc_manager)

        assert results['Existing Deployment'] is False

    def test_missing_artifact(self, config_file, clean_env, rpc_manager, tmp_path):
        (tmp_path / 'contracts' / 'Healthcare.sol').unlink()

        results = run_checks(config_file, rpc_manager)

        assert results['Contract Artifact'] is False

    def test_bad_config_fails_everything_downstream(self, tmp_path, clean_env, rpc_manager):
        results = run_checks(str(tmp_path / 'missing.json'), rpc_manager)

        assert results['Configuration File'] is False
        assert results['Credentials'] is False
        assert results['Contract Artifact'] is False

    def test_main_exit_code(self, config_file, clean_env, rpc_manager):
        clean_env.setenv('GANACHE_PRIVATE_KEYS', DEV_KEY_0)

        with patch.object(check_system, 'RPCManager', return_value=rpc_manager):
            assert check_system.main(config_file) == 0

        rpc_manager.get_status.side_effect = ConnectionError("refused")

        with patch.object(check_system, 'RPCManager', return_value=rpc_manager):
            assert check_system.main(config_file) == 1


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
