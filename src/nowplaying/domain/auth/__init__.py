"""
Access gate for admin operations.

Issues and verifies signed, time-limited admin credentials.
"""

from .tokens import (
    ADMIN_ROLE,
    AdminClaims,
    authorize,
    check_admin_credentials,
    decode_token,
    hash_password,
    issue_token,
    parse_bearer,
)

__all__ = [
    "ADMIN_ROLE",
    "AdminClaims",
    "authorize",
    "check_admin_credentials",
    "decode_token",
    "hash_password",
    "issue_token",
    "parse_bearer",
]
