from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single provisioning step."""

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    exe = state.setdefault("execution", {})
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("decisions", {})
    return state


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def run_pipeline(*, state: Dict[str, Any], steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    There is no retry and no resume: a raising step leaves
    execution.current_step pointing at itself and the exception propagates.
    Earlier steps are not rolled back.
    """

    ensure_defaults(state)
    ran: List[str] = []

    for step in steps:
        state["execution"]["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        state = step.run(state)
        state["execution"]["completed_steps"].append(step.step_id)
        ran.append(step.step_id)

    state["execution"]["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
