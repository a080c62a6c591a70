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


def run_pipeline(*, state: Dict[str, Any], steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order.

    The first exception stops the pipeline; later steps never run and
    nothing that already happened is undone.
    """

    ran: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.debug("Running step %s", step.step_id)
        state = step.run(state)
        ran.append(step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
