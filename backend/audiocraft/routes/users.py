"""
AudioCraft Backend: User Route Handlers
=======================================

What:  GET /api/users/profile, the caller's account including signup time.
"""

from fastapi import APIRouter, Depends, Response

from audiocraft.dependencies import get_current_account
from audiocraft.models.account import Account
from audiocraft.schemas.account import ProfileResponse
from audiocraft.schemas.common import ErrorResponse

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get the caller's profile",
)
async def get_profile(
    response: Response,
    account: Account = Depends(get_current_account),
) -> ProfileResponse:
    # Credit balance changes with every enhancement
    response.headers["Cache-Control"] = "private, no-store"
    return ProfileResponse.from_account(account)
