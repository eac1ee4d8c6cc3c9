"""
AudioCraft Backend: Payment Schemas
===================================

What:  Contracts for the checkout stub and webhook acknowledgement.
"""

from typing import Optional

from pydantic import BaseModel, Field

from audiocraft.schemas.common import CamelModel


class CheckoutRequest(BaseModel):
    plan: Optional[str] = Field(default=None, description="Plan identifier, e.g. 'pro'")


class CheckoutResponse(CamelModel):
    success: bool = True
    checkout_url: str = Field(description="Where the client redirects to pay")
    session_id: str = Field(description="Checkout session identifier")


class WebhookAck(BaseModel):
    received: bool = True
