"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# MRN lookup
# ---------------------------------------------------------------------------

class LookupAction(str, Enum):
    VALIDATE = "validate"
    DEMOGRAPHICS = "demographics"


class LookupRequest(BaseModel):
    """A parsed lookup request – MRNs in request order, duplicates kept."""
    model_config = ConfigDict(frozen=True)

    action: LookupAction
    mrns: list[str] = Field(..., min_length=1)
    secret: str

    @property
    def wants_demographics(self) -> bool:
        return self.action is LookupAction.DEMOGRAPHICS


class SubjectResult(BaseModel):
    """Lookup result for a single requested MRN."""
    mrn: str
    valid: bool
    demographics: dict[str, str | None] | None = None

    def to_filtered(self) -> dict[str, Any]:
        """Validity-only object, or validity plus the normalized demographics."""
        filtered: dict[str, Any] = {"mrn": self.mrn, "valid": self.valid}
        if self.demographics is not None:
            for field, value in self.demographics.items():
                if field not in filtered:
                    filtered[field] = value
        return filtered


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    environment: str
    shared_secret: str = "configured"
    token_provider: str = "configured"
