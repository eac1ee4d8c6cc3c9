"""
AudioCraft Backend: Account Schemas
===================================

What:  Request and response contracts for /api/auth and /api/users.
Why separate from the Account model: the password hash must never leave the
       service, so responses are built field by field from these schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from audiocraft.models.account import Account, SubscriptionStatus
from audiocraft.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CredentialsRequest(BaseModel):
    """
    Body of POST /api/auth/signup.

    Only presence is checked. The email is kept exactly as typed.
    """
    email: str = Field(min_length=1, description="Account email (case-sensitive)")
    password: str = Field(min_length=1, description="Plaintext password")


class LoginRequest(BaseModel):
    """
    Body of POST /api/auth/login.

    Fields are optional here: a missing email or password is just another
    set of wrong credentials and gets the same 401 as any other.
    """
    email: Optional[str] = None
    password: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SubscriptionView(CamelModel):
    status: SubscriptionStatus = Field(description="none or active")


class PublicUser(CamelModel):
    """Public projection of an account: everything but the password hash."""
    id: str
    email: str
    free_tracks_left: int
    subscription: SubscriptionView

    @classmethod
    def from_account(cls, account: Account) -> "PublicUser":
        return cls(
            id=account.id,
            email=account.email,
            free_tracks_left=account.free_tracks_left,
            subscription=SubscriptionView(status=account.subscription),
        )


class ProfileResponse(PublicUser):
    """GET /api/users/profile: the public view plus the signup timestamp."""
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "ProfileResponse":
        return cls(
            id=account.id,
            email=account.email,
            free_tracks_left=account.free_tracks_left,
            subscription=SubscriptionView(status=account.subscription),
            created_at=account.created_at,
        )


class AuthResponse(CamelModel):
    """Returned by signup and login."""
    success: bool = True
    token: str = Field(description="Bearer token, valid for TOKEN_TTL_DAYS")
    user: PublicUser


class VerifyResponse(CamelModel):
    success: bool = True
    user: PublicUser
