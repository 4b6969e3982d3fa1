"""llms.txt generation route."""

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from llmstxt_gen.api.deps import AppSettings, Pipeline, RunStore
from llmstxt_gen.services.errors import CrawlUnavailableError
from llmstxt_gen.services.preview import split_preview
from llmstxt_gen.services.survey import validate_params

logger = logging.getLogger(__name__)
router = APIRouter()


class GenerateRequest(BaseModel):
    """Survey answers as submitted by the form."""

    model_config = ConfigDict(extra="ignore")

    site_name: str | None = None
    site_url: str | None = None
    summary: str | None = None
    categories: str | None = None
    site_type: str | None = None
    excludes: str | None = None
    important_pages: str | None = None
    priority_pages: str | None = None
    optional_pages: str | None = None
    questions: str | None = None


@router.post("/generate")
def generate_llmstxt(
    payload: GenerateRequest,
    settings: AppSettings,
    pipeline: Pipeline,
    run_store: RunStore,
) -> Any:
    """Generate llms.txt, store it as an unpaid run and return a preview."""
    params = payload.model_dump()

    errors = validate_params(params)
    if errors:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    try:
        document = pipeline.generate(params)
        run_id = run_store.create(document.content)
        preview = split_preview(document.content)
    except CrawlUnavailableError as e:
        logger.warning(f"Generation unavailable for {params.get('site_url')}: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": e.message},
        )
    except Exception:
        logger.exception(f"Generate error for {params.get('site_url')}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate llms.txt."},
        )

    return {
        "runId": run_id,
        "preview": preview.visible,
        "lockedPreview": preview.locked,
        "mode": document.mode,
        "warnings": document.warnings,
        "enrichmentUsed": document.enrichment_used,
        "payment": {
            "provider": "Stripe Checkout",
            "priceUsd": settings.price_usd,
            "billing": "one-time",
            "payAfter": True,
        },
    }
