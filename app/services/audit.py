"""Audit logging for MRN lookups. Counts only – no MRNs, no secrets."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_lookup(
    *,
    action: str,
    status_code: int,
    requested: int,
    recognised: int,
    detail: dict[str, Any] | None = None,
) -> None:
    """Write one audit line per completed lookup."""
    logger.info(
        "AUDIT: lookup action=%s status=%d requested=%d recognised=%d%s",
        action,
        status_code,
        requested,
        recognised,
        "".join(f" {key}={value}" for key, value in sorted((detail or {}).items())),
    )
