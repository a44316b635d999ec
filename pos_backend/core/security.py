"""
Security utilities: JWT, password hashing, authentication (ASYNC VERSION)
"""
from typing import Annotated, Optional
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from slowapi import Limiter
from slowapi.util import get_remote_address
from config import (
    SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES,
    TOKEN_REFRESH_THRESHOLD_MINUTES, API_VERSION, RATE_LIMIT_ENABLED
)
from pos_backend.database.session import get_db
from pos_backend.database.models.user import User, UserRole
from pos_backend.core.i18n_logger import get_i18n_logger

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

if not SECRET_KEY or not ALGORITHM:
    raise RuntimeError("SECRET_KEY and ALGORITHM must be set in environment variables")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"/api/{API_VERSION}/auth/token")

logger = get_i18n_logger(__name__)


# === Password Utilities ===

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password; complexity rules are enforced by the UserRegister schema"""
    return pwd_context.hash(password)


# === JWT Token Utilities ===

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Data to encode in token (typically {"sub": username})
        expires_delta: Optional custom expiration time
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Raises:
        JWTError: If token is invalid
        ExpiredSignatureError: If token has expired
    """
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def get_token_remaining_duration(payload: dict) -> timedelta:
    exp_timestamp = payload.get("exp")
    if exp_timestamp is None:
        return timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    exp_datetime = datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)
    return exp_datetime - datetime.now(timezone.utc)


def should_refresh_token(payload: dict) -> bool:
    """True when less than TOKEN_REFRESH_THRESHOLD_MINUTES remain"""
    remaining = get_token_remaining_duration(payload)
    return remaining.total_seconds() < TOKEN_REFRESH_THRESHOLD_MINUTES * 60


# === Authentication Dependencies ===

async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
    response: Response
) -> User:
    """
    Resolve the bearer token to a User.

    Tokens close to expiry are renewed: a fresh token with a full
    lifetime is returned in the X-New-Token response header.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
        username: Optional[str] = payload.get("sub")
        if username is None:
            raise credentials_exception
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired. Please login again.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if user is None:
        raise credentials_exception

    if should_refresh_token(payload):
        response.headers["X-New-Token"] = create_access_token(data={"sub": user.username})
        logger.info("auth.token.refreshed", username=user.username)

    return user


async def get_current_owner_user(
    current_user: Annotated[User, Depends(get_current_user)]
) -> User:
    """
    Verify the current user is the restaurant owner.

    Raises:
        HTTPException 403: If user is not an owner
    """
    if current_user.role != UserRole.OWNER:
        logger.warning("auth.unauthorized.access", username=current_user.username)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This operation requires owner privileges"
        )
    return current_user
