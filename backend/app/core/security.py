"""Password hashing and bearer tokens for employee logins.

Tokens carry the employee id as ``sub`` and an ``exp`` claim; the access level
is included for clients, but the API always re-reads it from the database.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from backend.app.core.settings import get_settings

TOKEN_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    employee_id: int,
    expires_minutes: Optional[int] = None,
    access_level: Optional[int] = None,
) -> str:
    settings = get_settings()
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    claims: Dict[str, Any] = {
        "sub": str(employee_id),
        "exp": datetime.now(timezone.utc) + timedelta(minutes=lifetime),
    }
    if access_level is not None:
        claims["lvl"] = access_level
    return jwt.encode(claims, settings.secret_key, algorithm=TOKEN_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Return the token claims, raising ValueError for expired or forged tokens."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise ValueError("Expired token") from exc
    except jwt.InvalidTokenError as exc:
        raise ValueError("Invalid token") from exc
