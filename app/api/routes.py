"""
FastAPI routes – the lookup endpoint and a health check.

Non-200 lookup outcomes are answered with an empty body; the status code
alone tells the caller what went wrong.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.lookup.service import MrnLookupService
from app.schemas.api import HealthResponse
from app.services.tokens import SettingsTokenProvider

logger = logging.getLogger(__name__)

router = APIRouter()


def get_lookup_service() -> MrnLookupService:
    """FastAPI dependency that builds the orchestrator from settings."""
    provider = SettingsTokenProvider(
        scope=settings.TOKEN_SCOPE,
        token=settings.ID_API_TOKEN,
        endpoint=settings.ID_API_ENDPOINT,
    )
    return MrnLookupService(settings, provider)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
def health_check():
    """Report whether the pieces a lookup needs are configured."""
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        shared_secret="configured" if settings.SHARED_SECRET else "missing",
        token_provider=(
            "configured"
            if settings.ID_API_TOKEN and settings.ID_API_ENDPOINT
            else "missing"
        ),
    )


# ---------------------------------------------------------------------------
# MRN lookup
# ---------------------------------------------------------------------------

@router.post("/mrn-lookup")
async def mrn_lookup(
    request: Request, service: MrnLookupService = Depends(get_lookup_service)
):
    """
    Validate a batch of MRNs, or return their demographics.

    Body: {"action": "validate" | "demographics", "mrns": "mrn1,mrn2", "secret": "..."}
    """
    raw_body = await request.body()
    outcome = await run_in_threadpool(service.handle, raw_body)
    if outcome.body is None:
        return Response(status_code=outcome.status_code)
    return JSONResponse(content=outcome.body, status_code=outcome.status_code)
