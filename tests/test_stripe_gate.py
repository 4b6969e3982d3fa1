import hashlib
import hmac
import json
from urllib.parse import parse_qs

import httpx
import pytest

from llmstxt_gen.services.errors import PaymentError, PaymentNotConfiguredError
from llmstxt_gen.services.stripe_gate import (
    CHECKOUT_URL,
    StripeCheckout,
    parse_signature_header,
    verify_webhook,
)

SECRET = "whsec_test"
NOW = 1_700_000_000


def sign(payload, secret=SECRET, timestamp=NOW):
    digest = hmac.new(secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def completed_event(run_id="run-1", **session):
    session = {"metadata": {"run_id": run_id}, "payment_status": "paid", **session}
    return json.dumps({"type": "checkout.session.completed", "data": {"object": session}})


class TestVerifyWebhook:
    def test_valid_payment_event(self):
        payload = completed_event()
        event = verify_webhook(payload, sign(payload), SECRET, now=NOW + 10)
        assert event.valid is True
        assert event.event_type == "checkout.session.completed"
        assert event.run_id == "run-1"

    def test_client_reference_id_fallback(self):
        payload = json.dumps({
            "type": "checkout.session.completed",
            "data": {"object": {"client_reference_id": "run-2"}},
        })
        assert verify_webhook(payload, sign(payload), SECRET, now=NOW).run_id == "run-2"

    def test_unpaid_session_has_no_run(self):
        payload = completed_event(payment_status="unpaid")
        event = verify_webhook(payload, sign(payload), SECRET, now=NOW)
        assert event.valid is True
        assert event.run_id is None

    def test_other_event_types_are_acknowledged(self):
        payload = json.dumps({"type": "invoice.paid", "data": {"object": {"metadata": {"run_id": "x"}}}})
        event = verify_webhook(payload, sign(payload), SECRET, now=NOW)
        assert event.valid is True
        assert event.run_id is None

    def test_wrong_secret(self):
        payload = completed_event()
        assert verify_webhook(payload, sign(payload, secret="other"), SECRET, now=NOW).valid is False

    def test_tampered_payload(self):
        payload = completed_event()
        assert verify_webhook(completed_event("run-9"), sign(payload), SECRET, now=NOW).valid is False

    def test_stale_timestamp(self):
        payload = completed_event()
        assert verify_webhook(payload, sign(payload), SECRET, now=NOW + 301).valid is False

    def test_malformed_header(self):
        payload = completed_event()
        assert verify_webhook(payload, "garbage", SECRET, now=NOW).valid is False

    def test_non_object_payload(self):
        payload = "[]"
        assert verify_webhook(payload, sign(payload), SECRET, now=NOW).valid is False

    def test_missing_secret(self):
        with pytest.raises(PaymentNotConfiguredError):
            verify_webhook("{}", "t=1,v1=x", None)

    def test_missing_signature(self):
        with pytest.raises(PaymentError):
            verify_webhook("{}", None, SECRET)


def test_parse_signature_header_multiple_signatures():
    assert parse_signature_header("t=1, v1=a, v0=z, v1=b") == ("1", ["a", "b"])
    assert parse_signature_header("v1=a") is None


class TestStripeCheckout:
    def make_checkout(self, settings, handler):
        configured = settings.model_copy(update={"stripe_secret_key": "sk_test", "stripe_price_id": "price_123"})
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return StripeCheckout(configured, http_client=client)

    def test_creates_session(self, settings):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={"url": "https://checkout.stripe.com/c/pay/cs_test"})

        checkout = self.make_checkout(settings, handler)
        url = checkout.create_session("run-1", "https://app.example")

        assert url == "https://checkout.stripe.com/c/pay/cs_test"
        request = seen["request"]
        assert str(request.url) == CHECKOUT_URL
        assert request.headers["Authorization"] == "Bearer sk_test"
        assert request.headers["Idempotency-Key"] == "checkout-run-1"
        form = parse_qs(request.content.decode())
        assert form["mode"] == ["payment"]
        assert form["line_items[0][price]"] == ["price_123"]
        assert form["metadata[run_id]"] == ["run-1"]
        assert form["success_url"] == ["https://app.example/success?runId=run-1"]

    def test_stripe_error(self, settings):
        checkout = self.make_checkout(
            settings, lambda request: httpx.Response(400, json={"error": {"message": "No such price"}})
        )
        with pytest.raises(PaymentError):
            checkout.create_session("run-1", "https://app.example")

    def test_transport_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        checkout = self.make_checkout(settings, handler)
        with pytest.raises(PaymentError):
            checkout.create_session("run-1", "https://app.example")

    def test_not_configured(self, settings):
        with pytest.raises(PaymentNotConfiguredError):
            StripeCheckout(settings).create_session("run-1", "https://app.example")
