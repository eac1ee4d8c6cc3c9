"""
AudioCraft Backend: Entitlement Service
=======================================

What:  Decides whether an account may run one enhancement and charges it.

Policy:
    subscription active           → allowed, nothing charged
    no subscription, credits > 0  → allowed, one credit charged
    no subscription, credits == 0 → CreditsExhaustedError, nothing changed

The charge goes through AccountStore.consume_credit, which checks and
decrements in one locked step.
"""

import logging

from audiocraft.database import AccountStore
from audiocraft.exceptions import CreditsExhaustedError
from audiocraft.models.account import Account

logger = logging.getLogger(__name__)


class EntitlementService:

    def authorize_and_charge(self, store: AccountStore, account: Account) -> int:
        """
        Authorize one processing request for `account`.

        Returns:
            The free credit balance after the request.

        Raises:
            CreditsExhaustedError: no subscription and no credits left.
        """
        if account.has_active_subscription:
            logger.debug("Account %s is subscribed; no credit charged", account.id)
            return account.free_tracks_left

        remaining = store.consume_credit(account.id)
        if remaining is None:
            logger.info("Account %s has no credits remaining", account.id)
            raise CreditsExhaustedError(context={"account_id": account.id})

        logger.info("Charged one credit to account %s (%d left)", account.id, remaining)
        return remaining


entitlement_service = EntitlementService()
