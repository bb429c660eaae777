"""
User Record
Decodes the user tuple returned by Healthcare.getUser
"""

from enum import IntEnum
from typing import NamedTuple, Sequence


class InvalidRoleError(ValueError):
    """Role value outside the contract's enumeration"""


class Role(IntEnum):
    NONE = 0
    PATIENT = 1
    DOCTOR = 2
    ADMIN = 3


def decode_role(value: int) -> Role:
    """
    Decode a raw role value

    Args:
        value: uint8 returned by the contract

    Returns:
        Role member
    """
    try:
        return Role(value)
    except ValueError:
        raise InvalidRoleError(f"Unknown role value: {value!r}") from None


class UserRecord(NamedTuple):
    full_name: str
    email: str
    role: int
    is_verified: bool
    ipfs_hash: str

    @classmethod
    def from_call_result(cls, result: Sequence) -> 'UserRecord':
        """
        Build a record from a getUser() call result

        A struct return value arrives wrapped in a one-element sequence.
        """
        if len(result) == 1 and isinstance(result[0], (list, tuple)):
            result = result[0]

        if len(result) != 5:
            raise ValueError(f"Expected 5 user fields, got {len(result)}")

        full_name, email, role, is_verified, ipfs_hash = result
        return cls(full_name, email, int(role), bool(is_verified), ipfs_hash)

    @property
    def role_label(self) -> str:
        return decode_role(self.role).name

    def format_lines(self):
        """Human readable lines for console output"""
        return [
            f"Full Name: {self.full_name}",
            f"Email: {self.email}",
            f"Role: {self.role} ({self.role_label})",
            f"Is Verified: {self.is_verified}",
            f"IPFS Hash: {self.ipfs_hash}"
        ]
