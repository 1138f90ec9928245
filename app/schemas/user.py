from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class UserBase(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)

    @field_validator("first_name", "last_name", "phone")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None


class UserChangePassword(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6)

    class Config:
        json_schema_extra = {
            "example": {
                "currentPassword": "old_password123",
                "newPassword": "new_secure_password456",
            }
        }


class UserSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    trust_score: Optional[int] = 50


class UserContact(UserSummary):
    email: str
    phone: str


class UserResponse(UserContact):
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    identity_verified: bool = False
    avatar: Optional[str] = None
    created_at: datetime


class PublicUser(UserSummary):
    created_at: datetime


class TokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
