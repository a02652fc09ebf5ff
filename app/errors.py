"""
Error taxonomy for the MRN lookup flow.

Every error carries the HTTP status the caller receives. The stage runner
records a raised error as the result of the stage that raised it, so the
orchestrator never needs exception handling of its own to pick a status.
"""

from __future__ import annotations


class MrnLookupError(Exception):
    """Base class for all lookup failures."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__doc__ or self.__class__.__name__)
        self.message = str(self)


# ---------------------------------------------------------------------------
# Credential gate
# ---------------------------------------------------------------------------

class AuthError(MrnLookupError):
    """Shared secret rejected."""


class SecretMissing(AuthError):
    """No shared secret was supplied."""

    status_code = 401


class SecretMismatch(AuthError):
    """Shared secret does not match the configured value."""

    status_code = 403


# ---------------------------------------------------------------------------
# Request parsing – answered with 206 Partial Content and no body
# ---------------------------------------------------------------------------

class ParseError(MrnLookupError):
    """Request is unsupported or carries nothing to look up."""

    status_code = 206


class UnsupportedAction(ParseError):
    """Action must be 'validate' or 'demographics'."""


class EmptyMrnList(ParseError):
    """No MRNs left after splitting the request list."""


# ---------------------------------------------------------------------------
# Token provider – absorbed by the orchestrator, never surfaced
# ---------------------------------------------------------------------------

class TokenError(MrnLookupError):
    """No usable bearer token."""


class TokenUnavailable(TokenError):
    """Token provider returned no token or endpoint."""


# ---------------------------------------------------------------------------
# Demographics client
# ---------------------------------------------------------------------------

class ClientError(MrnLookupError):
    """Downstream demographics API call failed."""

    status_code = 500


class DownstreamBadStatus(ClientError):
    """Downstream API answered with a non-200 status."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Downstream API returned HTTP {code}")


class MalformedResponse(ClientError):
    """Downstream API returned a body without a usable result array."""


class DownstreamTransportError(ClientError):
    """Downstream API could not be reached."""
