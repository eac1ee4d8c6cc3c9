"""
AudioCraft Backend: Payment Route Handlers
==========================================

What:  POST /api/payments/create-checkout and POST /api/payments/webhook.

Both endpoints are unauthenticated: the checkout is reachable from the public
pricing page, and the webhook is called by the payment provider.
"""

from fastapi import APIRouter, Request

from audiocraft.schemas.common import ErrorResponse
from audiocraft.schemas.payment import CheckoutRequest, CheckoutResponse, WebhookAck
from audiocraft.services.payment_service import payment_service

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.post(
    "/create-checkout",
    response_model=CheckoutResponse,
    responses={500: {"description": "Payment setup failed", "model": ErrorResponse}},
    summary="Start a (mock) checkout session",
)
async def create_checkout(payload: CheckoutRequest) -> CheckoutResponse:
    return payment_service.create_checkout(payload.plan)


@router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Payment provider webhook",
    description="Accepts the raw request body and acknowledges it.",
)
async def payment_webhook(request: Request) -> WebhookAck:
    payload = await request.body()
    return payment_service.handle_webhook(payload)
