"""
Fuzz Testing for Record Decoding and Signer Addresses
Tests edge cases and unexpected inputs
"""

import pytest
from hypothesis import given, strategies as st
from web3 import Web3

from blockchain.user_record import Role, UserRecord, InvalidRoleError, decode_role
from wallet.wallet_manager import Signer


class TestRoleDecodingFuzzing:
    """Fuzz test role enumeration decoding"""

    @given(value=st.integers(min_value=0, max_value=3))
    def test_valid_roles_decode(self, value):
        role = decode_role(value)

        assert int(role) == value
        assert role.name in ('NONE', 'PATIENT', 'DOCTOR', 'ADMIN')

    @given(value=st.integers().filter(lambda v: v < 0 or v > 3))
    def test_invalid_roles_rejected(self, value):
        with pytest.raises(InvalidRoleError):
            decode_role(value)

    def test_role_labels(self):
        assert [role.name for role in Role] == ['NONE', 'PATIENT', 'DOCTOR', 'ADMIN']


class TestUserRecordFuzzing:
    """Fuzz test getUser() result handling"""

    @given(
        full_name=st.text(),
        email=st.text(),
        role=st.integers(min_value=0, max_value=3),
        is_verified=st.booleans(),
        ipfs_hash=st.text()
    )
    def test_flat_and_struct_results_agree(self, full_name, email, role, is_verified, ipfs_hash):
        fields = (full_name, email, role, is_verified, ipfs_hash)

        flat = UserRecord.from_call_result(list(fields))
        wrapped = UserRecord.from_call_result([fields])

        assert flat == wrapped == UserRecord(*fields)

        lines = flat.format_lines()
        assert len(lines) == 5
        assert lines[2] == f"Role: {role} ({Role(role).name})"

    @given(fields=st.lists(st.integers(), max_size=8).filter(lambda f: len(f) != 5))
    def test_wrong_field_count(self, fields):
        with pytest.raises(ValueError):
            UserRecord.from_call_result(fields)

    @given(role=st.integers(min_value=4, max_value=255))
    def test_out_of_range_role_fails_formatting(self, role):
        record = UserRecord('A', 'a@b.c', role, True, '')

        with pytest.raises(InvalidRoleError):
            record.format_lines()


class TestSignerAddressFuzzing:
    """Fuzz test signer address normalisation"""

    @given(raw=st.binary(min_size=20, max_size=20))
    def test_address_checksummed(self, raw):
        address = '0x' + raw.hex()

        signer = Signer(address)

        assert len(signer.address) == 42
        assert signer.address.lower() == address
        assert Web3.is_checksum_address(signer.address)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
