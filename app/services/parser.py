"""
Inbound request parsing.

Body shape:
    {"action": "validate" | "demographics", "mrns": "mrn1,mrn2,...", "secret": "..."}
"""

from __future__ import annotations

import json
import logging
from typing import Any

from app.errors import EmptyMrnList, UnsupportedAction
from app.schemas.api import LookupAction, LookupRequest

logger = logging.getLogger(__name__)


def decode_body(raw_body: bytes) -> dict[str, Any]:
    """
    Decode the request body. Anything that is not a JSON object decodes to
    an empty dict so the credential gate sees a missing secret.
    """
    try:
        params = json.loads(raw_body or b"{}")
    except (UnicodeDecodeError, ValueError):
        logger.warning("Request body is not valid JSON")
        return {}
    return params if isinstance(params, dict) else {}


def split_mrns(raw_mrns: Any) -> list[str]:
    """Split a comma-delimited MRN string into trimmed, non-empty tokens."""
    if not isinstance(raw_mrns, str):
        return []
    return [token.strip() for token in raw_mrns.split(",") if token.strip()]


def build_request(params: dict[str, Any]) -> LookupRequest:
    action = params.get("action")
    if action not in [a.value for a in LookupAction]:
        logger.info("Unsupported action %r", action)
        raise UnsupportedAction()

    mrns = split_mrns(params.get("mrns"))
    if not mrns:
        logger.info("Request carries no MRNs")
        raise EmptyMrnList()

    return LookupRequest(
        action=LookupAction(action),
        mrns=mrns,
        secret=str(params.get("secret") or ""),
    )


def parse_request(raw_body: bytes) -> LookupRequest:
    return build_request(decode_body(raw_body))
