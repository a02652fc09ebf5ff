"""
Linear stage runner for the per-request lookup state machine.

Each stage is a plain function taking the accumulated context dict and
returning the keys it adds. Stages run strictly in order; when one raises,
the error is recorded on that stage, every later stage is skipped, and the
flow reports the failure instead of propagating the exception. There is no
retry between stages.

Usage:
    flow = StageFlow("mrn_lookup")
    flow.add_stage("authenticate", authenticate_fn, LookupState.AUTHENTICATED)
    flow.add_stage("parse", parse_fn, LookupState.PARSED)
    result = flow.run({"raw_body": b"..."})
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from app.errors import MrnLookupError

logger = logging.getLogger(__name__)


class LookupState(str, Enum):
    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    PARSED = "parsed"
    TOKEN_RESOLVED = "token_resolved"
    BATCH_FETCHED = "batch_fetched"
    NORMALIZED = "normalized"
    SERIALIZED = "serialized"


class StageStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class Stage:
    """A single step of the flow and the state reached once it succeeds."""

    name: str
    execute_fn: Callable[[dict[str, Any]], dict[str, Any] | None]
    reaches: LookupState
    status: StageStatus = StageStatus.PENDING
    result: dict[str, Any] = field(default_factory=dict)
    error: MrnLookupError | None = None
    duration_ms: float = 0.0


@dataclass
class FlowResult:
    state: LookupState
    context: dict[str, Any]
    failed_stage: str | None = None
    error: MrnLookupError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StageFlow:
    def __init__(self, name: str):
        self.name = name
        self.stages: dict[str, Stage] = {}

    def add_stage(
        self,
        name: str,
        execute_fn: Callable[[dict[str, Any]], dict[str, Any] | None],
        reaches: LookupState,
    ) -> StageFlow:
        if name in self.stages:
            raise ValueError(f"Duplicate stage name: {name}")
        self.stages[name] = Stage(name=name, execute_fn=execute_fn, reaches=reaches)
        return self  # allow chaining

    def run(self, initial_context: dict[str, Any] | None = None) -> FlowResult:
        """Run every stage in order, stopping at the first failure."""
        context = dict(initial_context or {})
        result = FlowResult(state=LookupState.RECEIVED, context=context)

        logger.debug("Starting flow '%s' with %d stages", self.name, len(self.stages))

        for stage in self.stages.values():
            if result.error is not None:
                stage.status = StageStatus.SKIPPED
                continue

            stage.status = StageStatus.RUNNING
            start = time.perf_counter()
            try:
                stage.result = stage.execute_fn(context) or {}
                stage.status = StageStatus.SUCCESS
            except MrnLookupError as exc:
                stage.error = exc
            except Exception as exc:
                logger.exception("Stage '%s' raised unexpectedly", stage.name)
                stage.error = MrnLookupError(f"Unexpected failure in {stage.name}: {exc}")
            finally:
                stage.duration_ms = (time.perf_counter() - start) * 1000

            if stage.error is not None:
                stage.status = StageStatus.FAILED
                result.failed_stage = stage.name
                result.error = stage.error
                logger.info(
                    "Stage '%s' failed in state '%s': %s",
                    stage.name, result.state.value, stage.error,
                )
                continue

            context.update(stage.result)
            result.state = stage.reaches

        logger.debug("Flow '%s' finished in state '%s'", self.name, result.state.value)
        return result

    def summary(self) -> dict[str, Any]:
        """Per-stage status and timing of the last run."""
        return {
            "name": self.name,
            "stages": {
                name: {
                    "status": stage.status.value,
                    "duration_ms": round(stage.duration_ms, 2),
                    "error": str(stage.error) if stage.error else None,
                }
                for name, stage in self.stages.items()
            },
        }
