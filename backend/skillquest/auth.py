# skillquest/auth.py
"""Bearer token handling.

Identities are issued by an external provider as HS256 JWTs whose subject
is the learner's e-mail address.  ``create_access_token`` mints the same
kind of token for local development and the test-suite.
"""

from datetime import datetime, timedelta
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.models import User
from skillquest.database import get_session
from skillquest.crud import get_user_by_email

import os

SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# auto_error is off so anonymous callers reach read-only endpoints.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token", auto_error=False)


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_subject(token: str) -> str | None:
    """Return the e-mail stored in ``token`` or ``None`` if it is invalid."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub") or None


async def get_current_email(token: str | None = Depends(oauth2_scheme)) -> str:
    """Resolve the caller's e-mail, rejecting anonymous requests."""
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "auth_required", "message": "Not authenticated"},
        )
    email = decode_subject(token)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return email


async def get_optional_email(
    token: str | None = Depends(oauth2_scheme),
) -> str | None:
    if token is None:
        return None
    return decode_subject(token)


async def get_current_user(
    email: str = Depends(get_current_email),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Load the learner record behind the bearer token."""
    user = await get_user_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
