"""Stripe Checkout session creation and webhook verification."""

import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass

import httpx

from llmstxt_gen.config import Settings
from llmstxt_gen.services.errors import PaymentError, PaymentNotConfiguredError

logger = logging.getLogger(__name__)

CHECKOUT_URL = "https://api.stripe.com/v1/checkout/sessions"
PAYMENT_EVENTS = {
    "checkout.session.completed",
    "checkout.session.async_payment_succeeded",
}


@dataclass
class WebhookEvent:
    """Outcome of verifying a Stripe webhook delivery."""

    valid: bool
    event_type: str | None = None
    run_id: str | None = None


class StripeCheckout:
    """Creates one-time payment Checkout sessions keyed by run id."""

    def __init__(self, settings: Settings, http_client: httpx.Client | None = None):
        self.secret_key = settings.stripe_secret_key
        self.price_id = settings.stripe_price_id
        self.http_client = http_client

    @property
    def configured(self) -> bool:
        return bool(self.secret_key and self.price_id)

    def create_session(self, run_id: str, origin: str) -> str:
        """Create a Checkout session and return its hosted URL.

        Raises:
            PaymentNotConfiguredError: Stripe keys are missing
            PaymentError: bad arguments or Stripe rejected the request
        """
        if not self.configured:
            raise PaymentNotConfiguredError("Stripe is not configured.")
        if not run_id:
            raise PaymentError("Missing run_id.")
        if not origin:
            raise PaymentError("Missing origin.")

        form = {
            "mode": "payment",
            "success_url": f"{origin}/success?runId={run_id}",
            "cancel_url": f"{origin}/?checkout=cancel&runId={run_id}",
            "line_items[0][price]": self.price_id,
            "line_items[0][quantity]": "1",
            "client_reference_id": run_id,
            "metadata[run_id]": run_id,
        }
        headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Idempotency-Key": f"checkout-{run_id}",
        }

        try:
            if self.http_client is not None:
                response = self.http_client.post(CHECKOUT_URL, data=form, headers=headers)
            else:
                with httpx.Client(timeout=15.0) as client:
                    response = client.post(CHECKOUT_URL, data=form, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Stripe checkout request failed: {e}")
            raise PaymentError("Stripe checkout failed.") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message")
            except ValueError:
                message = response.text
            logger.error(f"Stripe checkout error: {message}")
            raise PaymentError("Stripe checkout failed.")

        url = response.json().get("url")
        if not url:
            raise PaymentError("Stripe checkout failed.")

        logger.info(f"Created Stripe checkout session for run {run_id}")
        return url


def parse_signature_header(header: str | None) -> tuple[str, list[str]] | None:
    """Split ``t=...,v1=...`` into (timestamp, signatures)."""
    if not header:
        return None

    timestamp = None
    signatures = []
    for part in header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            timestamp = value
        elif key == "v1" and value:
            signatures.append(value)

    if not timestamp or not signatures:
        return None
    return timestamp, signatures


def verify_webhook(
    payload: str,
    signature_header: str | None,
    secret: str | None,
    tolerance: int = 300,
    now: float | None = None,
) -> WebhookEvent:
    """Verify a Stripe-Signature header and extract the paid run id.

    Raises:
        PaymentNotConfiguredError: webhook secret is missing
        PaymentError: signature header or payload is missing
    """
    if not secret:
        raise PaymentNotConfiguredError("Stripe webhook secret not configured.")
    if not signature_header:
        raise PaymentError("Missing Stripe signature.")
    if not payload:
        raise PaymentError("Missing payload.")

    parsed = parse_signature_header(signature_header)
    if parsed is None:
        return WebhookEvent(valid=False)
    timestamp, signatures = parsed

    try:
        age = abs((time.time() if now is None else now) - int(timestamp))
    except ValueError:
        return WebhookEvent(valid=False)
    if age > tolerance:
        logger.warning(f"Rejected Stripe webhook with stale timestamp ({age:.0f}s old)")
        return WebhookEvent(valid=False)

    expected = hmac.new(
        secret.encode(),
        f"{timestamp}.{payload}".encode(),
        hashlib.sha256,
    ).hexdigest()
    if not any(hmac.compare_digest(sig, expected) for sig in signatures):
        return WebhookEvent(valid=False)

    try:
        event = json.loads(payload)
    except json.JSONDecodeError:
        return WebhookEvent(valid=False)
    if not isinstance(event, dict):
        return WebhookEvent(valid=False)

    event_type = event.get("type")
    run_id = None
    if event_type in PAYMENT_EVENTS:
        session = (event.get("data") or {}).get("object") or {}
        payment_status = session.get("payment_status")
        if payment_status in (None, "paid"):
            run_id = (session.get("metadata") or {}).get("run_id") or session.get("client_reference_id")

    return WebhookEvent(valid=True, event_type=event_type, run_id=run_id)
