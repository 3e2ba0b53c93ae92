import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core import config
from app.core.errors import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error is off so a missing header maps to our 401 body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================================
# PASSWORDS
# ============================================================================


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        logger.warning("Password verification failed: malformed stored hash")
        return False


# ============================================================================
# TOKENS
# ============================================================================


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed bearer token for a user.

    Args:
        user_id: id embedded as the token subject
        expires_delta: token lifetime (default ACCESS_TOKEN_EXPIRE_HOURS)
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=config.ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Verify a token and return the user id it was issued for."""
    if not token:
        raise UnauthorizedError()
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise ForbiddenError("Invalid token") from e

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise ForbiddenError("Invalid token") from e


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return decode_access_token(credentials.credentials)
