"""Shared fixtures – a fake token provider and an in-memory identity API."""

import json

import httpx
import pytest

from app.config import Settings
from app.lookup.service import MrnLookupService
from app.services.demographics import DemographicsClient

SECRET = "S3cr3t-value"
ENDPOINT = "https://identity.example.org/api/mrns"
TOKEN = "tok-123"


class FakeTokenProvider:
    def __init__(self, token=TOKEN, endpoint=ENDPOINT, error=None):
        self.token = token
        self.endpoint = endpoint
        self.error = error
        self.scopes = []

    def find_valid_token(self, scope):
        self.scopes.append(scope)
        if self.error:
            raise self.error
        return self.token

    def get_api_endpoint(self, scope):
        return self.endpoint


class FakeIdentityApi:
    """Records outbound requests and answers with a canned result array."""

    def __init__(self, records=None, status_code=200, body=None, error=None):
        self.records = records or []
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error(f"cannot reach {request.url}", request=request)
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json={"result": self.records})

    def client(self) -> DemographicsClient:
        return DemographicsClient(
            timeout=5.0, http_client=httpx.Client(transport=httpx.MockTransport(self))
        )


def make_patient(mrn="111", **overrides):
    record = {
        "mrn": mrn,
        "birthDate": "1990-01-01",
        "firstName": "A",
        "lastName": "B",
        "gender": "F",
        "canonicalEthnicity": "X",
        "canonicalRace": "Y",
        "zip": "94305",
    }
    record.update(overrides)
    return record


def make_body(action="validate", mrns="111", secret=SECRET) -> bytes:
    params = {"action": action, "mrns": mrns}
    if secret is not None:
        params["secret"] = secret
    return json.dumps(params).encode()


@pytest.fixture
def settings():
    return Settings(SHARED_SECRET=SECRET, TOKEN_SCOPE="id", DEMOGRAPHICS_TIMEOUT_SECONDS=5.0)


@pytest.fixture
def make_service(settings):
    def _make(api=None, provider=None):
        api = api or FakeIdentityApi()
        return MrnLookupService(settings, provider or FakeTokenProvider(), api.client())

    return _make
