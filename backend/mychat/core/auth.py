"""
Bearer token handling.

Tokens are issued by the identity provider; this module decodes them and
resolves the user they belong to. create_access_token signs tokens with the
same key for tests and local tooling.
"""
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from mychat.core.config import settings
from mychat.core.errors import UnauthenticatedError
from mychat.db.session import get_db
from mychat.models.user import User

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_user_id(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Resolve the caller, or None for anonymous / invalid tokens."""
    if credentials is None:
        return None
    user_id = decode_user_id(credentials.credentials)
    if not user_id:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthenticatedError("Could not validate credentials")
    return user
