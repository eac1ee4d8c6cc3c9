"""
AudioCraft Backend: Request Dependencies
========================================

What:  FastAPI dependencies shared by the authenticated routes.
How:   `get_current_account` reads `Authorization: Bearer <token>`, verifies
       the token, and loads the account from the store on every request.
       There is no session cache keyed by token.
"""

from typing import Optional

from fastapi import Depends, Header

from audiocraft.database import AccountStore, get_account_store
from audiocraft.models.account import Account
from audiocraft.services.auth_service import auth_service

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an Authorization header value, or None."""
    if not authorization:
        return None
    if not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].strip() or None


def get_current_account(
    authorization: Optional[str] = Header(default=None),
    store: AccountStore = Depends(get_account_store),
) -> Account:
    """
    Resolve the caller's account.

    Raises:
        UnauthenticatedError: missing, malformed, expired or forged token
        NotFoundError: token is valid but its account no longer exists
    """
    return auth_service.resolve_account(store, extract_bearer_token(authorization))
