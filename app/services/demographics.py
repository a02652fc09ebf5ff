"""
Client for the downstream identity/demographics API.

One batched POST per lookup carries every requested MRN:

    POST <endpoint>
    Authorization: Bearer <token>
    {"mrns": ["111", "222", ...]}

    -> {"result": [{"mrn": "111", "birthDate": ..., ...}, ...]}

MRNs the API does not know are simply absent from `result`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.errors import DownstreamBadStatus, DownstreamTransportError, MalformedResponse
from app.schemas.identity import DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA
from app.services.validation import validate_against_schema

logger = logging.getLogger(__name__)

DemographicsRecord = dict[str, Any]


def rekey_by_mrn(records: list[DemographicsRecord]) -> dict[str, DemographicsRecord]:
    """Index batch records by MRN. A repeated MRN keeps the last record."""
    batch: dict[str, DemographicsRecord] = {}
    for record in records:
        mrn = record["mrn"]
        if mrn in batch:
            logger.warning("Downstream returned MRN more than once; keeping the last record")
        batch[mrn] = record
    return batch


class DemographicsClient:
    """Single-shot synchronous client; no retries, bounded by `timeout`."""

    def __init__(self, timeout: float = 10.0, http_client: httpx.Client | None = None):
        self.timeout = timeout
        self._http_client = http_client

    def _post(self, endpoint: str, headers: dict[str, str], body: dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return self._http_client.post(endpoint, headers=headers, json=body, timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(endpoint, headers=headers, json=body)

    def fetch_batch(
        self, mrns: list[str], token: str, endpoint: str
    ) -> dict[str, DemographicsRecord]:
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        logger.info("Requesting demographics for %d MRNs", len(mrns))

        try:
            response = self._post(endpoint, headers, {"mrns": list(mrns)})
        except httpx.HTTPError as exc:
            logger.error("Exception calling identifier endpoint: %r", exc)
            raise DownstreamTransportError(str(exc)) from exc

        if response.status_code != 200:
            logger.error("HTTP return code is: %d", response.status_code)
            raise DownstreamBadStatus(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Identifier endpoint returned undecodable JSON: %s", exc)
            raise MalformedResponse("Response body is not JSON") from exc

        errors = validate_against_schema(payload, DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA)
        if errors:
            logger.error("Identifier endpoint returned a malformed body: %s", "; ".join(errors))
            raise MalformedResponse(errors[0])

        batch = rekey_by_mrn(payload["result"])
        logger.info("Identifier endpoint recognised %d of %d MRNs", len(batch), len(mrns))
        return batch
