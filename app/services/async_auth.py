from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.async_session import get_async_db
from app.models.user import User
from app.schemas.auth import TokenPayload, UserRegister
from app.services.async_error_handler import AsyncErrorHandler, run_query
from app.utils.logger import auth_logger

# OAuth2 scheme for async authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/token")


class AsyncAuthService:
    """
    Identity collaborator: registration, credential checks and bearer tokens.

    Everything downstream only ever sees the authenticated user's id.
    """

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a hash."""
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password for storage."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    @classmethod
    def create_access_token(cls, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a new JWT access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        expire = datetime.now(timezone.utc) + expires_delta
        to_encode = {"sub": str(user_id), "exp": expire}

        return jwt.encode(
            to_encode,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    @classmethod
    async def get_user_by_email(cls, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email."""
        result = await run_query(db, select(User).where(User.email == email), "get user by email")
        return result.scalar_one_or_none()

    @classmethod
    async def get_user_by_id(cls, db: AsyncSession, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await run_query(db, select(User).where(User.id == user_id), "get user by id")
        return result.scalar_one_or_none()

    @classmethod
    async def register_user(cls, db: AsyncSession, user_data: UserRegister) -> User:
        """
        Create a new account.

        Raises:
            HTTPException: 400 if the email or username is already taken
        """
        # Fast path; the unique constraints below still settle concurrent sign-ups
        existing = await run_query(
            db,
            select(User.id).where(or_(User.email == user_data.email, User.username == user_data.username)),
            "check existing user",
        )
        if existing.first() is not None:
            auth_logger.warning("Registration rejected, user exists", "REGISTER", username=user_data.username)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email or username already exists",
            )

        user = User(
            username=user_data.username,
            email=user_data.email,
            hashed_password=cls.get_password_hash(user_data.password),
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            auth_logger.warning("Registration lost a race, user exists", "REGISTER", username=user_data.username)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email or username already exists",
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise AsyncErrorHandler.handle_error(e, "register user")

        await db.refresh(user)
        auth_logger.success("User registered", "REGISTER", user_id=user.id)
        return user

    @classmethod
    async def authenticate(cls, db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, otherwise None."""
        user = await cls.get_user_by_email(db, email)
        if not user or not cls.verify_password(password, user.hashed_password):
            auth_logger.warning("Failed login attempt", "LOGIN", email=email)
            return None
        return user

    @classmethod
    async def get_current_user(cls, db: AsyncSession, token: str) -> User:
        """Get the current authenticated user from the token."""
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

        try:
            payload = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
            token_data = TokenPayload(**payload)
            user_id = int(token_data.sub)
        except (jwt.PyJWTError, ValueError):
            raise credentials_exception

        user = await cls.get_user_by_id(db, user_id)
        if user is None:
            raise credentials_exception

        return user


async def get_current_user_async(
    db: AsyncSession = Depends(get_async_db),
    token: str = Depends(oauth2_scheme)
) -> User:
    """FastAPI dependency resolving the bearer token to a user."""
    return await AsyncAuthService.get_current_user(db, token)
