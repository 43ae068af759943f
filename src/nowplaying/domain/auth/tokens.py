"""
Admin credential issuance and verification.

Tokens are HS256 JWTs carrying the admin username and role with a fixed
lifetime. Expiry is checked against an injectable clock rather than by
PyJWT so callers (and tests) control "now".
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from loguru import logger

from nowplaying.core.config import AuthConfig
from nowplaying.core.errors import Unauthorized

ADMIN_ROLE = "admin"
BEARER_PREFIX = "Bearer "
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class AdminClaims:
    """Identity embedded in a verified token."""

    username: str
    role: str
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    """bcrypt hash suitable for the admin_password_hash setting."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("ascii")


def check_admin_credentials(username: str, password: str, config: AuthConfig) -> bool:
    """Compare a username/password pair against the configured admin."""
    if not secrets.compare_digest(username.encode("utf-8"), config.admin_username.encode("utf-8")):
        return False

    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(password_bytes, config.admin_password_hash.encode("utf-8"))
    except ValueError:
        logger.error("Configured admin password hash is not a valid bcrypt hash")
        return False


def issue_token(
    username: str, config: AuthConfig, now: Optional[datetime] = None
) -> str:
    """Sign a token for username that expires after the configured lifetime."""
    now = now or _utc_now()
    expires_at = now + timedelta(hours=config.token_lifetime_hours)
    payload = {
        "username": username,
        "role": ADMIN_ROLE,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.algorithm)


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an Authorization header value.

    Raises:
        Unauthorized: Header missing or not a bearer credential
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("No token provided")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthorized("No token provided")
    return token


def decode_token(
    token: str, config: AuthConfig, now: Optional[datetime] = None
) -> AdminClaims:
    """Verify signature and expiry of a token.

    Raises:
        Unauthorized: Malformed, badly signed, incomplete or expired token
    """
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.algorithm],
            options={"verify_exp": False, "verify_iat": False, "require": ["exp"]},
        )
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise Unauthorized("Invalid token") from e

    try:
        expires_at = datetime.fromtimestamp(float(payload["exp"]), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError) as e:
        raise Unauthorized("Invalid token") from e

    now = now or _utc_now()
    if expires_at < now:
        raise Unauthorized("Token expired")

    username = payload.get("username")
    role = payload.get("role")
    if not username or role != ADMIN_ROLE:
        raise Unauthorized("Invalid token")

    return AdminClaims(username=username, role=role, expires_at=expires_at)


def authorize(
    authorization: Optional[str], config: AuthConfig, now: Optional[datetime] = None
) -> AdminClaims:
    """Gate for mutating calls: bearer header in, verified claims out."""
    return decode_token(parse_bearer(authorization), config, now)
