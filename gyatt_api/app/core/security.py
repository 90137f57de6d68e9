"""
Security helpers for password hashing and JWT authentication.

Passwords are hashed with bcrypt using the cost factor from
``Settings.bcrypt_rounds``.  Access tokens are HS256 JSON Web Tokens
(via PyJWT) carrying the caller's ``id``, ``email`` and ``isAdmin``
flag plus the standard ``iat``/``exp`` claims.  Tokens are stateless:
nothing is stored server side and there is no revocation.

The FastAPI dependencies at the bottom of this module form the
authorization gate used by the endpoints:

* ``get_current_user`` requires a valid ``Authorization: Bearer``
  header and returns the decoded claims.
* ``require_admin`` additionally requires ``isAdmin`` to be true.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings
from .errors import ExpiredToken, Forbidden, InvalidToken, Unauthenticated

logger = logging.getLogger(__name__)

# bcrypt only consumes the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh bcrypt salt.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    rounds : int
        bcrypt cost factor (log2 of the number of iterations).

    Returns
    -------
    str
        The bcrypt digest in modular crypt format (``$2b$...``).
    """
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a stored bcrypt digest.

    A missing or malformed digest never verifies.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password digest is not a valid bcrypt hash")
        return False


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a signed JWT with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed, e.g. ``{"id": 1, "email": "a@b.c", "isAdmin": False}``.
    settings : Settings
        Supplies the signing key, algorithm and default lifetime.
    expires_delta : Optional[timedelta]
        Token lifetime.  Defaults to ``settings.access_token_expire_minutes``.
    issued_at : Optional[datetime]
        Issuance time; defaults to now.  The expiry is computed from it.

    Returns
    -------
    str
        The encoded token.
    """
    issued = issued_at or datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = dict(data)
    to_encode["iat"] = int(issued.timestamp())
    to_encode["exp"] = int((issued + lifetime).timestamp())
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify a token and return its claims.

    Raises
    ------
    ExpiredToken
        If the ``exp`` claim is in the past.
    InvalidToken
        If the signature does not verify or the token is malformed.
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredToken("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(f"Invalid token: {exc}") from exc


def token_claims_for(user: Dict[str, Any]) -> Dict[str, Any]:
    """Claims embedded in the access token of ``user`` (a stored record)."""
    return {"id": user["id"], "email": user["email"], "isAdmin": bool(user.get("isAdmin"))}


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Dependency that retrieves the claims of the authenticated caller.

    A request without a bearer token is rejected with 401.  A token
    that fails verification (bad signature, malformed, expired) is
    rejected with 403.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access denied. No token provided.")
    try:
        return decode_access_token(credentials.credentials, settings)
    except (InvalidToken, ExpiredToken) as exc:
        logger.info("Rejected token: %s", exc.message)
        raise Unauthenticated("Invalid or expired token.", status_code=403) from exc


def require_admin(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency that only lets administrators through."""
    if current_user.get("isAdmin") is not True:
        raise Forbidden("Admin access required.")
    return current_user
