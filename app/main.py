"""
FastAPI application entrypoint.

Run locally:  uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI

from app.api.routes import router
from app.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(levelname)s | %(name)s | %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(
    title="MRN Lookup Service",
    description=(
        "Authenticated proxy in front of the identity/demographics API: "
        "validates batches of MRNs and returns normalized demographics."
    ),
    version="1.0.0",
)

app.include_router(router, prefix="/api/v1")
