"""Auth Schemas: signup/login request and response bodies.

Invariants:
    - SignupRequest.username: trimmed, 3-30 chars
    - SignupRequest.password: 6-72 chars, never echoed back
    - UserResponse never carries the password hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from tasklist.core.errors import InputValidationError
from tasklist.core.validation import check_password, normalize_username


class SignupRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        try:
            return normalize_username(v)
        except InputValidationError as e:
            raise ValueError(e.message) from None

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        try:
            return check_password(v)
        except InputValidationError as e:
            raise ValueError(e.message) from None


class LoginRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    created_at: datetime


class SignupResponse(BaseModel):
    message: str = "User created successfully"
    token: str
    user: UserResponse


class TokenResponse(BaseModel):
    token: str
