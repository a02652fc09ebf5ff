"""Tests for bearer token acquisition."""

import pytest

from app.errors import TokenUnavailable
from app.services.tokens import SettingsTokenProvider, TokenGrant, acquire_token
from conftest import FakeTokenProvider


def test_acquire_token_returns_grant():
    provider = FakeTokenProvider(token="abc", endpoint="https://api/x")
    assert acquire_token(provider, "id") == TokenGrant(token="abc", endpoint="https://api/x")
    assert provider.scopes == ["id"]


@pytest.mark.parametrize("token,endpoint", [("", "https://api/x"), ("abc", ""), (None, None)])
def test_empty_token_or_endpoint_is_unavailable(token, endpoint):
    with pytest.raises(TokenUnavailable):
        acquire_token(FakeTokenProvider(token=token, endpoint=endpoint), "id")


def test_provider_exception_is_unavailable():
    provider = FakeTokenProvider(error=RuntimeError("token manager down"))
    with pytest.raises(TokenUnavailable, match="token manager down"):
        acquire_token(provider, "id")


def test_settings_provider_serves_only_its_scope():
    provider = SettingsTokenProvider(scope="id", token="abc", endpoint="https://api/x")
    assert acquire_token(provider, "id").endpoint == "https://api/x"
    with pytest.raises(TokenUnavailable):
        acquire_token(provider, "other")
