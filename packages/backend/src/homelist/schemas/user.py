"""Pydantic schemas for accounts, login, and profile.

Learn: Request schemas keep every field optional so the service can
report missing input as a 400 with one readable message, the same way
for JSON that omits a key and JSON that sends an empty string.
Response schemas never declare password_hash, so it can't leak.

String lengths match the users table columns.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


# ─── Requests ───────────────────────────────────────────

class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    current_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("current_password", "currentPassword")
    )
    new_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("new_password", "newPassword")
    )


# ─── Responses ──────────────────────────────────────────

class UserRead(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Register/login result: the token is the bearer credential."""
    message: str
    user: UserRead
    token: str


class ProfileResponse(BaseModel):
    message: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
