"""
Password hashing and access token helpers.

Passwords are hashed with passlib (PBKDF2-SHA256); access tokens are signed
JWTs issued with PyJWT.
"""

from datetime import timedelta
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from catalog_service.utils.exceptions import UnauthorizedException
from catalog_service.utils.timestamps import utc_now

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored hash; malformed hashes never verify."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(
    claims: Dict[str, Any],
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60
) -> str:
    """
    Create a signed access token.

    Args:
        claims: Claims to embed (``sub``, ``sid``, ...)
        secret_key: Signing key
        algorithm: JWT signing algorithm
        expires_minutes: Token lifetime

    Returns:
        Encoded JWT
    """
    now = utc_now()
    payload = {
        **claims,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        UnauthorizedException: If the token is expired, tampered with or malformed
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedException("Session token has expired")
    except jwt.PyJWTError as e:
        raise UnauthorizedException("Invalid session token", details={"reason": str(e)})
