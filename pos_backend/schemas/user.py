"""
Pydantic schemas for users and authentication
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, EmailStr, field_validator
from pos_backend.database.models.user import UserRole

SPECIAL_CHARACTERS = "!@#$%^&*()-+_=[]{}|;:,.<>?"


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, description="Username for login")
    email: EmailStr = Field(..., description="User email address")


class UserRegister(UserBase):
    """Registration payload; the first account becomes the owner"""
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")

    @field_validator('password')
    @classmethod
    def validate_password_complexity(cls, v: str) -> str:
        """Complexity rules; a violation comes back as 422"""
        if len(v.encode('utf-8')) > 72:
            raise ValueError("Password must be less than 72 bytes long")
        if " " in v:
            raise ValueError("Password must not contain spaces")
        if not any(char.isupper() for char in v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not any(char.islower() for char in v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char in SPECIAL_CHARACTERS for char in v):
            raise ValueError(f"Password must contain at least one special character ({SPECIAL_CHARACTERS})")
        return v


class UserResponse(UserBase):
    id: int
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    user: UserResponse
