# File: /docview/security.py | Version: 2.0 | Title: JWT Security (bearer token -> owner id)
from datetime import UTC, datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from docview.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)


def _jwt_encode(claims: dict) -> str:
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _jwt_decode(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return _jwt_encode(to_encode)


def get_current_owner(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Owner id from the bearer token's ``sub`` claim."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception
    try:
        payload = _jwt_decode(credentials.credentials)
        if payload.get("type") not in (None, "access"):
            raise credentials_exception
        owner_id: Optional[str] = payload.get("sub")
        if not owner_id:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    return str(owner_id)
