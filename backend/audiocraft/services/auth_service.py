"""
AudioCraft Backend: Authentication Service
==========================================

What:  Password hashing, bearer token issuance/verification, and the
       signup/login/resolve workflows built on them.
How:   passlib CryptContext for salted, slow password hashes; PyJWT HS256
       tokens carrying the account id in `sub` and a 7-day `exp`.
Who:   Called by the auth routes and by the `get_current_account` dependency.

Token claims:
    sub: account id (str)
    iat: issued-at (UTC)
    exp: iat + settings.token_ttl_days

Failure mapping:
    unknown email / wrong password        → UnauthenticatedError("Invalid credentials")
    missing/malformed/expired/forged token → UnauthenticatedError("Invalid token")
    valid token, account gone              → NotFoundError("User not found")
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from passlib.context import CryptContext

from audiocraft.config import settings
from audiocraft.database import AccountStore
from audiocraft.exceptions import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
)
from audiocraft.models.account import Account, SubscriptionStatus

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# pbkdf2_sha256 for new hashes; bcrypt hashes from an imported user base
# still verify and are flagged for rehash.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256", "bcrypt"],
    default="pbkdf2_sha256",
    deprecated="auto",
)


class AuthService:
    """
    Stateless authentication logic.

    The store is passed into every workflow call, matching how routes receive
    it through dependency injection.
    """

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        return pwd_context.verify(password, password_hash)

    # ── Tokens ────────────────────────────────────────────────────────────

    def _signing_key(self) -> str:
        if not settings.jwt_secret:
            raise ConfigurationError(
                message="Server is not configured",
                context={"missing": "JWT_SECRET"},
            )
        return settings.jwt_secret

    def create_access_token(
        self,
        account_id: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Issue a signed bearer token bound to `account_id`.

        Args:
            account_id: The account the token authenticates.
            expires_delta: Override the lifetime (tests use negative values to
                           mint already-expired tokens).
        """
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(days=settings.token_ttl_days)
        payload = {
            "sub": account_id,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, self._signing_key(), algorithm=settings.jwt_algorithm)

    def decode_access_token(self, token: Optional[str]) -> str:
        """
        Verify a bearer token and return the account id it carries.

        Raises:
            UnauthenticatedError: token absent, malformed, expired, or signed
                with another key.
        """
        if not token:
            raise UnauthenticatedError(message="No token")

        try:
            payload = jwt.decode(
                token,
                self._signing_key(),
                algorithms=[settings.jwt_algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthenticatedError(context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", type(e).__name__)
            raise UnauthenticatedError(context={"reason": type(e).__name__})

        account_id = payload.get("sub")
        if not isinstance(account_id, str) or not account_id:
            raise UnauthenticatedError(context={"reason": "missing subject"})
        return account_id

    # ── Workflows ─────────────────────────────────────────────────────────

    def register(self, store: AccountStore, email: str, password: str) -> Tuple[str, Account]:
        """
        Create an account with the signup credit grant and log it in.

        Returns:
            (token, account)

        Raises:
            ConflictError: the email is already registered.
        """
        if store.get_by_email(email) is not None:
            raise ConflictError(context={"email": email})

        account = Account(
            email=email,
            password_hash=self.hash_password(password),
            free_tracks_left=settings.free_tracks,
            subscription=SubscriptionStatus.NONE,
        )
        # add() re-checks the email under the store lock, so a concurrent
        # signup for the same address still ends in ConflictError
        store.add(account)
        logger.info("Account created: %s", account.id)

        return self.create_access_token(account.id), account

    def login(
        self, store: AccountStore, email: Optional[str], password: Optional[str]
    ) -> Tuple[str, Account]:
        """
        Check credentials and issue a fresh token.

        Unknown emails and missing fields run a dummy hash verification so
        every failure path takes comparable time, and all raise the same error.
        """
        account = store.get_by_email(email) if email else None
        if account is None or not password:
            pwd_context.dummy_verify()
            raise UnauthenticatedError(message=INVALID_CREDENTIALS)

        if not self.verify_password(password, account.password_hash):
            logger.info("Failed login for account %s", account.id)
            raise UnauthenticatedError(message=INVALID_CREDENTIALS)

        logger.info("Account logged in: %s", account.id)
        return self.create_access_token(account.id), account

    def resolve_account(self, store: AccountStore, token: Optional[str]) -> Account:
        """Verify a token and load the account it names."""
        account_id = self.decode_access_token(token)
        account = store.get_by_id(account_id)
        if account is None:
            raise NotFoundError(
                resource="user",
                resource_id=account_id,
                message="User not found",
            )
        return account


auth_service = AuthService()
