"""
Authentication endpoints
"""
from fastapi import APIRouter, HTTPException, status, Depends, Body, Request
from fastapi.security import OAuth2PasswordRequestForm
from typing import Annotated
from sqlalchemy import select, func, or_
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.core.security import verify_password, create_access_token, get_password_hash, limiter
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.user import User, UserRole
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.user import LoginResponse, UserResponse, UserRegister


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Authentication"])


# ============================================================================
# REGISTRATION ENDPOINT
# ============================================================================
@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    summary="Register a new user",
    description="Create a new account. The first account becomes the restaurant owner."
)
@limiter.limit("5/minute")
async def register(
    request: Request,
    db: DbDependency,
    form_data: Annotated[UserRegister, Body(...)]
):
    """
    Register a new user.

    Password requirements:
    - At least 8 characters
    - Contains uppercase and lowercase letters
    - Contains at least one digit
    - Contains at least one special character
    - No spaces allowed
    """
    result = await db.execute(
        select(User).where(or_(User.username == form_data.username, User.email == form_data.email.lower()))
    )
    if result.first() is not None:
        logger.warning("auth.registration.failed", reason=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered"
        )

    user_count = (await db.execute(select(func.count(User.id)))).scalar_one()
    role = UserRole.OWNER if user_count == 0 else UserRole.STAFF

    new_user = User(
        username=form_data.username,
        email=form_data.email,
        hashed_password=get_password_hash(form_data.password),
        role=role,
    )
    db.add(new_user)
    await commit_or_raise(db, conflict_message="Username or email already registered")
    await db.refresh(new_user)

    logger.info(
        "auth.registration.success",
        role=new_user.role.value,
        username=new_user.username,
        user_id=new_user.id
    )
    return new_user


# ============================================================================
# LOGIN ENDPOINT
# ============================================================================
@router.post(
    "/token",
    response_model=LoginResponse,
    summary="Login to get access token",
    description="Authenticate with username and password to receive a JWT token"
)
@limiter.limit("10/minute")
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbDependency,
    request: Request
):
    result = await db.execute(select(User).where(User.username == form_data.username))
    user = result.scalar_one_or_none()

    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.warning("auth.login.failed", username=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": user.username})
    logger.info("auth.login.success", username=user.username, role=user.role.value)

    return LoginResponse(access_token=access_token, user=UserResponse.model_validate(user))


# ============================================================================
# GET CURRENT USER PROFILE
# ============================================================================
@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile"
)
async def get_current_user_info(current_user: CurrentUser):
    """Token refresh is handled by the CurrentUser dependency (X-New-Token header)"""
    return current_user
