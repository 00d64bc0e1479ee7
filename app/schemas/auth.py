from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

# NOTE: email-validator is required by Pydantic for EmailStr validation


# Registration schemas
class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9]+$")
    email: EmailStr
    password: str = Field(..., min_length=6)


# Login schemas
class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserPublic(BaseModel):
    """User fields safe to return to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: EmailStr
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    user: UserPublic
    token: str


class ProfileResponse(BaseModel):
    user: UserPublic


# Token schemas
class Token(BaseModel):
    access_token: str
    token_type: str
    expires_in: int


class TokenPayload(BaseModel):
    sub: str
    exp: int
