"""
Shared-secret credential gate.

The calling system proves itself with a secret that must match the
configured `SHARED_SECRET`. Nothing else in the request is looked at
until this check passes.
"""

from __future__ import annotations

import hmac
import logging

from app.errors import SecretMismatch, SecretMissing

logger = logging.getLogger(__name__)


def mask_secret(secret: str | None, visible: int = 2) -> str:
    """Render a secret for logs: a short prefix, the rest starred."""
    if not secret:
        return "<empty>"
    return secret[:visible] + "*" * max(len(secret) - visible, 3)


def authenticate(provided_secret: str | None, configured_secret: str) -> None:
    """Raise SecretMissing (401) or SecretMismatch (403) unless the secrets match."""
    if not provided_secret:
        logger.error("The shared secret is empty; request rejected")
        raise SecretMissing()

    if not configured_secret or not hmac.compare_digest(
        str(provided_secret).encode("utf-8", "surrogatepass"),
        configured_secret.encode("utf-8", "surrogatepass"),
    ):
        logger.error("The shared secret does not match")
        logger.debug(
            "Configured secret: %s, received secret: %s",
            mask_secret(configured_secret),
            mask_secret(str(provided_secret)),
        )
        raise SecretMismatch()
