"""Stripe Checkout route."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from llmstxt_gen.api.deps import Checkout, RunStore
from llmstxt_gen.services.errors import PaymentError, PaymentNotConfiguredError

logger = logging.getLogger(__name__)
router = APIRouter()


class CheckoutRequest(BaseModel):
    run_id: str = Field("", alias="runId")


@router.post("/checkout")
def create_checkout(
    payload: CheckoutRequest,
    request: Request,
    run_store: RunStore,
    checkout: Checkout,
) -> JSONResponse:
    """Start a Checkout session for an unpaid run."""
    if not payload.run_id:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Missing runId."})

    run = run_store.find_active(payload.run_id)
    if not run:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Run not found."})
    if run.paid:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": "Run is already paid."})

    origin = f"{request.url.scheme}://{request.url.netloc}"
    try:
        url = checkout.create_session(payload.run_id, origin)
    except PaymentNotConfiguredError as e:
        logger.error(f"Checkout unavailable: {e}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(e)})
    except PaymentError as e:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": str(e)})

    return JSONResponse(content={"url": url})
