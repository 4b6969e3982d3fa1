"""Run status and llms.txt download routes."""

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from llmstxt_gen.api.deps import RunStore

router = APIRouter()


class RunStatusResponse(BaseModel):
    """Payment status of a run."""

    runId: str
    paid: bool


@router.get("/run", response_model=RunStatusResponse)
def get_run(
    run_store: RunStore,
    run_id: str = Query("", alias="runId"),
) -> RunStatusResponse:
    """Report whether a run has been paid for."""
    if not run_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing runId.")

    run = run_store.find_active(run_id)
    if not run:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found.")

    return RunStatusResponse(runId=run_id, paid=run.paid)


@router.get("/download")
def download_llmstxt(
    run_store: RunStore,
    run_id: str = Query("", alias="runId"),
) -> PlainTextResponse:
    """Download the llms.txt file of a paid run."""
    if not run_id:
        return PlainTextResponse("Missing runId.", status_code=status.HTTP_400_BAD_REQUEST)

    run = run_store.find_active(run_id)
    if not run:
        return PlainTextResponse("Run not found.", status_code=status.HTTP_404_NOT_FOUND)
    if not run.paid:
        return PlainTextResponse("Payment required.", status_code=status.HTTP_402_PAYMENT_REQUIRED)

    return PlainTextResponse(
        content=run.content,
        media_type="text/plain",
        headers={
            "Content-Disposition": 'attachment; filename="llms.txt"',
            "Cache-Control": "no-store",
        },
    )
