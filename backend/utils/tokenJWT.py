# utils/tokenJWT.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import settings
from utils.access import Identity
from utils.errors import Unauthorized

# Missing headers are handled here so anonymous reads stay possible
bearer_scheme = HTTPBearer(auto_error=False)


# Generate a new JWT access token for a user id (sub) and optional email
def create_access_token(user_id: str, email: Optional[str] = None, expires_delta: timedelta = None) -> str:
    to_encode = {"sub": user_id}
    if email:
        to_encode["email"] = email
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_identity(token: str) -> Optional[Identity]:
    """Identity carried by ``token`` or None when it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        return None
    email = payload.get("email")
    return Identity(user_id=user_id, email=email if isinstance(email, str) else None)


# Required identity: 401 when the bearer token is missing or invalid
def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if credentials is None:
        raise Unauthorized()
    identity = decode_identity(credentials.credentials)
    if identity is None:
        raise Unauthorized("Could not validate credentials")
    return identity


# Optional identity: anonymous callers (and bad tokens) resolve to None
def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    if credentials is None:
        return None
    return decode_identity(credentials.credentials)
