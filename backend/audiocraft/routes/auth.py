"""
AudioCraft Backend: Auth Route Handlers
=======================================

What:  POST /api/auth/signup, POST /api/auth/login, GET /api/auth/verify.
How:   Thin handlers: parse the body, call AuthService, wrap the result.

Signup and login are plain `def` handlers so FastAPI runs the slow password
hash on its thread pool instead of the event loop.
"""

from fastapi import APIRouter, Depends

from audiocraft.database import AccountStore, get_account_store
from audiocraft.dependencies import get_current_account
from audiocraft.models.account import Account
from audiocraft.schemas.account import (
    AuthResponse,
    CredentialsRequest,
    LoginRequest,
    PublicUser,
    VerifyResponse,
)
from audiocraft.schemas.common import ErrorResponse
from audiocraft.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    responses={
        400: {"description": "User already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an account",
)
def signup(
    payload: CredentialsRequest,
    store: AccountStore = Depends(get_account_store),
) -> AuthResponse:
    """
    Register a new account with the signup credit grant.

    Returns a bearer token and the public account view. The account starts
    with settings.free_tracks credits and no subscription.
    """
    token, account = auth_service.register(store, payload.email, payload.password)
    return AuthResponse(token=token, user=PublicUser.from_account(account))


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
def login(
    payload: LoginRequest,
    store: AccountStore = Depends(get_account_store),
) -> AuthResponse:
    token, account = auth_service.login(store, payload.email, payload.password)
    return AuthResponse(token=token, user=PublicUser.from_account(account))


@router.get(
    "/verify",
    response_model=VerifyResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Check a bearer token",
)
async def verify(account: Account = Depends(get_current_account)) -> VerifyResponse:
    return VerifyResponse(user=PublicUser.from_account(account))
