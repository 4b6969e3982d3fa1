"""Webhook endpoints for external service callbacks."""

import logging
from typing import Any

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from llmstxt_gen.api.deps import AppSettings, RunStore
from llmstxt_gen.services.errors import PaymentError, PaymentNotConfiguredError
from llmstxt_gen.services.stripe_gate import verify_webhook

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/stripe", tags=["webhooks"])


@router.post("/webhook")
async def handle_stripe_webhook(
    request: Request,
    settings: AppSettings,
    run_store: RunStore,
    stripe_signature: str | None = Header(None),
) -> Any:
    """Handle Stripe payment events.

    A verified checkout completion marks the referenced run as paid, which
    unlocks its download and extends its retention.
    """
    try:
        payload = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Stripe webhook with undecodable body")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid payload."})

    try:
        event = verify_webhook(
            payload,
            stripe_signature,
            settings.stripe_webhook_secret,
            tolerance=settings.stripe_webhook_tolerance_seconds,
        )
    except PaymentNotConfiguredError as e:
        logger.error(f"Stripe webhook rejected: {e}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})
    except PaymentError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})

    if not event.valid:
        logger.warning("Stripe webhook with invalid signature")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid signature."})

    logger.info(f"Received Stripe event {event.event_type}")
    if event.run_id:
        run_store.mark_paid(event.run_id)

    return {"received": True}
