"""Auth Routes: signup and login.

Invariants:
    - signup answers 201 with a token and the public user fields
    - login answers only a token; bad credentials are 401 INVALID_CREDENTIALS
"""

import logging

from fastapi import APIRouter, Depends, status

from tasklist.api.dependencies import get_auth_service
from tasklist.schemas.auth import (
    LoginRequest, SignupRequest, SignupResponse, TokenResponse, UserResponse,
)
from tasklist.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: SignupRequest, auth: AuthService = Depends(get_auth_service),
):
    """Register a user and return their first token."""
    token, user = await auth.signup(body.username, body.password)
    return SignupResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    """Exchange username and password for a token."""
    return TokenResponse(token=await auth.login(body.username, body.password))
