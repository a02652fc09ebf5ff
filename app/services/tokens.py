"""
Bearer token acquisition.

The token provider is an external collaborator that hands out a bearer
token and the API base URL for a named credential scope. Only its
contract lives here, plus a provider backed by settings for standalone
deployments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from app.errors import TokenUnavailable

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    def find_valid_token(self, scope: str) -> str: ...

    def get_api_endpoint(self, scope: str) -> str: ...


@dataclass(frozen=True)
class TokenGrant:
    token: str
    endpoint: str


class SettingsTokenProvider:
    """Serves one statically configured token/endpoint pair for a single scope."""

    def __init__(self, scope: str, token: str, endpoint: str):
        self.scope = scope
        self._token = token
        self._endpoint = endpoint

    def _check_scope(self, scope: str) -> None:
        if scope != self.scope:
            raise KeyError(f"No credentials configured for scope '{scope}'")

    def find_valid_token(self, scope: str) -> str:
        self._check_scope(scope)
        return self._token

    def get_api_endpoint(self, scope: str) -> str:
        self._check_scope(scope)
        return self._endpoint


def acquire_token(provider: TokenProvider, scope: str) -> TokenGrant:
    """Return a usable token and endpoint, or raise TokenUnavailable."""
    try:
        token = provider.find_valid_token(scope)
        endpoint = provider.get_api_endpoint(scope)
    except Exception as exc:
        logger.error("Could not retrieve token for scope '%s': %s", scope, exc)
        raise TokenUnavailable(str(exc)) from exc

    if not token or not endpoint:
        logger.error("Token provider returned no %s for scope '%s'",
                     "token" if not token else "endpoint", scope)
        raise TokenUnavailable()
    return TokenGrant(token=token, endpoint=endpoint)
