"""
AudioCraft Backend: Payment Service (stub)
==========================================

What:  Stands in for a payment provider's checkout and webhook APIs.
How:   create_checkout() fabricates a redirect URL and a `cs_mock_` session id;
       handle_webhook() acknowledges any payload.

Neither operation talks to a network or changes an account. Subscription
state is never updated from webhooks, and webhook signatures are not checked.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import quote

from audiocraft.config import settings
from audiocraft.schemas.payment import CheckoutResponse, WebhookAck

logger = logging.getLogger(__name__)

# Stands in for the plan segment when the request names none
UNSPECIFIED_PLAN = "unspecified"


class PaymentService:

    def create_checkout(self, plan: Optional[str]) -> CheckoutResponse:
        """
        Build a mock checkout session for `plan`. Never fails: a request
        without a plan gets a URL for the "unspecified" plan.

        Example:
            create_checkout("pro") →
                checkout_url="https://checkout.stripe.com/pay/mock_pro_session"
                session_id="cs_mock_5f0c...e1"
        """
        if plan is None:
            plan = UNSPECIFIED_PLAN
        session_id = f"cs_mock_{uuid.uuid4()}"
        base = settings.checkout_base_url.rstrip("/")
        checkout_url = f"{base}/mock_{quote(plan, safe='')}_session"
        logger.info("Checkout session %s created for plan %r", session_id, plan)
        return CheckoutResponse(checkout_url=checkout_url, session_id=session_id)

    def handle_webhook(self, payload: bytes) -> WebhookAck:
        logger.info("Webhook received (%d bytes)", len(payload))
        return WebhookAck(received=True)


payment_service = PaymentService()
