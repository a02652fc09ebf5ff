"""
MRN lookup orchestration.

    authenticate -> parse -> resolve_token -> fetch_batch -> normalize -> serialize

Authentication and parsing fail fast before any external call. A missing
token is absorbed: the fetch is skipped and every MRN comes back invalid.
A failed downstream call aborts the whole batch with a 500.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.config import Settings
from app.errors import TokenError
from app.lookup.flow import FlowResult, LookupState, StageFlow
from app.services.audit import log_lookup
from app.services.auth import authenticate
from app.services.demographics import DemographicsClient
from app.services.normalizer import FIELD_MAPPING, build_result
from app.services.parser import build_request, decode_body
from app.services.tokens import TokenProvider, acquire_token

logger = logging.getLogger(__name__)


@dataclass
class LookupOutcome:
    status_code: int
    body: dict[str, Any] | None
    state: LookupState


class MrnLookupService:
    def __init__(
        self,
        settings: Settings,
        token_provider: TokenProvider,
        client: DemographicsClient | None = None,
    ):
        self.settings = settings
        self.token_provider = token_provider
        self.client = client or DemographicsClient(timeout=settings.DEMOGRAPHICS_TIMEOUT_SECONDS)

    # -----------------------------------------------------------------------
    # Stages (each receives and returns a context dict)
    # -----------------------------------------------------------------------

    def authenticate_caller(self, context: dict[str, Any]) -> dict[str, Any]:
        params = decode_body(context.get("raw_body", b""))
        authenticate(params.get("secret"), self.settings.SHARED_SECRET)
        return {"params": params}

    def parse(self, context: dict[str, Any]) -> dict[str, Any]:
        return {"request": build_request(context["params"])}

    def resolve_token(self, context: dict[str, Any]) -> dict[str, Any]:
        try:
            return {"grant": acquire_token(self.token_provider, self.settings.TOKEN_SCOPE)}
        except TokenError:
            logger.warning("No usable token; every MRN will be reported invalid")
            return {"grant": None}

    def fetch_batch(self, context: dict[str, Any]) -> dict[str, Any]:
        grant = context.get("grant")
        if grant is None:
            return {"batch": {}}
        request = context["request"]
        return {"batch": self.client.fetch_batch(request.mrns, grant.token, grant.endpoint)}

    def normalize(self, context: dict[str, Any]) -> dict[str, Any]:
        request = context["request"]
        results = [
            build_result(mrn, context["batch"], request.wants_demographics, FIELD_MAPPING)
            for mrn in request.mrns
        ]
        return {"results": results}

    def serialize(self, context: dict[str, Any]) -> dict[str, Any]:
        subjects: dict[str, Any] = {}
        for result in context["results"]:
            subjects[result.mrn] = result.to_filtered()
        return {"subjects": subjects}

    # -----------------------------------------------------------------------
    # Flow
    # -----------------------------------------------------------------------

    def build_flow(self) -> StageFlow:
        """Construct the per-request lookup flow."""
        flow = StageFlow("mrn_lookup")
        flow.add_stage("authenticate", self.authenticate_caller, LookupState.AUTHENTICATED)
        flow.add_stage("parse", self.parse, LookupState.PARSED)
        flow.add_stage("resolve_token", self.resolve_token, LookupState.TOKEN_RESOLVED)
        flow.add_stage("fetch_batch", self.fetch_batch, LookupState.BATCH_FETCHED)
        flow.add_stage("normalize", self.normalize, LookupState.NORMALIZED)
        flow.add_stage("serialize", self.serialize, LookupState.SERIALIZED)
        return flow

    def handle(self, raw_body: bytes) -> LookupOutcome:
        """Process one inbound request to completion."""
        flow = self.build_flow()
        result = flow.run({"raw_body": raw_body})
        logger.debug("Lookup flow summary: %s", flow.summary())
        outcome = self._to_outcome(result)
        if "request" in result.context:
            self._audit(result, outcome)
        return outcome

    @staticmethod
    def _to_outcome(result: FlowResult) -> LookupOutcome:
        if result.error is not None:
            return LookupOutcome(result.error.status_code, None, result.state)
        return LookupOutcome(200, result.context["subjects"], result.state)

    @staticmethod
    def _audit(result: FlowResult, outcome: LookupOutcome) -> None:
        request = result.context["request"]
        results = result.context.get("results", [])
        token_missing = "grant" in result.context and result.context["grant"] is None
        log_lookup(
            action=request.action.value,
            status_code=outcome.status_code,
            requested=len(request.mrns),
            recognised=sum(1 for subject in results if subject.valid),
            detail={"token": "missing"} if token_missing else None,
        )
