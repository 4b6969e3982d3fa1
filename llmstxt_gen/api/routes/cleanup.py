"""Expired run cleanup route for external schedulers."""

import hmac
import logging

from fastapi import APIRouter, Header, HTTPException, Query, status

from llmstxt_gen.api.deps import AppSettings, RunStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme == "Bearer" and token:
        return token
    return None


@router.api_route("/cleanup", methods=["GET", "POST"])
def cleanup_expired_runs(
    settings: AppSettings,
    run_store: RunStore,
    authorization: str | None = Header(None),
    token: str | None = Query(None),
) -> dict[str, int]:
    """Delete expired runs. Requires the cleanup token as bearer or ?token=."""
    supplied = _bearer_token(authorization) or token
    expected = settings.cleanup_token
    if not expected or not supplied or not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized.")

    deleted = run_store.delete_expired()
    logger.info(f"Cleanup removed {deleted} expired runs")
    return {"deleted": deleted}
