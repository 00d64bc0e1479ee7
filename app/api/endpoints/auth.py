from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.async_session import get_async_db
from app.models.user import User
from app.schemas.auth import AuthResponse, ProfileResponse, Token, UserLogin, UserPublic, UserRegister
from app.services.async_auth import AsyncAuthService, get_current_user_async
from app.utils.logger import auth_logger

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(user_data: UserRegister, db: AsyncSession = Depends(get_async_db)) -> Any:
    """
    Register a new user and return a bearer token for it.

    - **username**: 3-30 alphanumeric characters, unique
    - **email**: unique email address
    - **password**: at least 6 characters
    """
    user = await AsyncAuthService.register_user(db, user_data)

    return AuthResponse(
        message="User registered successfully",
        user=UserPublic.model_validate(user),
        token=AsyncAuthService.create_access_token(user.id),
    )


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_async_db)) -> Any:
    """Authenticate with email and password."""
    user = await AsyncAuthService.authenticate(db, login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    auth_logger.success("User logged in", "LOGIN", user_id=user.id)
    return AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(user),
        token=AsyncAuthService.create_access_token(user.id),
    )


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_async_db),
) -> Any:
    """
    OAuth2 compatible token login for the interactive docs.
    The username field carries the account email.
    """
    user = await AsyncAuthService.authenticate(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(
        access_token=AsyncAuthService.create_access_token(user.id),
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: User = Depends(get_current_user_async)) -> Any:
    """Get the authenticated user's profile."""
    return ProfileResponse(user=UserPublic.model_validate(current_user))
