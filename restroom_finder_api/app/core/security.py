"""
Security helpers for password hashing and JWT authentication.

Tokens are compact HS256 JSON Web Tokens built from base64url-encoded
header and payload segments and an HMAC-SHA256 signature keyed with
``settings.secret_key``.  The subject claim (``sub``) holds the user id
as a string and ``exp`` the expiry as a UNIX timestamp.

Passwords are stored as ``"<salt hex>$<hash hex>"`` using PBKDF2-HMAC
with SHA-256.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import AuthError, InvalidTokenError

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT carrying ``data`` plus an ``exp`` claim.

    Parameters
    ----------
    data : dict
        Claims to embed, e.g. ``{"sub": "42"}``.
    expires_delta : Optional[int]
        Lifetime in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(data)
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def create_user_token(user_id: int, expires_delta: Optional[int] = None) -> str:
    """Issue an access token whose subject is ``user_id``."""
    return create_access_token({"sub": str(user_id)}, expires_delta=expires_delta)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its payload.

    Returns ``None`` when the token is malformed, the signature does not
    match or the token has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency resolving the authenticated principal.

    Returns ``{"sub", "user_id", "role_id"}``.  Raises
    ``InvalidTokenError`` when the header is missing, the token does not
    verify, or the user it names is gone or disabled.
    """
    if credentials is None:
        raise InvalidTokenError("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise InvalidTokenError()
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise InvalidTokenError()

    from restroom_finder_api.app.core.db import MAX_ID, transaction
    from restroom_finder_api.app.repositories.user_repository import UserRepository

    if not 1 <= user_id <= MAX_ID:
        raise InvalidTokenError()

    with transaction() as conn:
        user = UserRepository(conn).find_by_id(user_id)
    if user is None:
        raise InvalidTokenError("User no longer exists")
    if user.disabled:
        raise InvalidTokenError("User account disabled")
    return {"sub": payload["sub"], "user_id": user.id, "role_id": user.role_id}


def require_roles(*role_ids: int) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    """Dependency factory restricting a route to the given role ids.

    Use as ``Depends(require_roles(ROLE_ADMIN))``.  Callers with any
    other role get ``AuthError``.
    """

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role_id") not in role_ids:
            raise AuthError("Insufficient permissions")
        return current_user

    return _role_dependency


def hash_password(password: str) -> str:
    """Hash a password with a fresh 16-byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check ``plain_password`` against a stored ``salt$hash`` string."""
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
