"""
================================================================================
Page Flows
================================================================================

Multi-step page actions (create envelope, fill signup form, ...) are plain
linear sequences of named steps. A Flow records the steps as they complete so
that a failure reports exactly where the sequence stopped.

    async with run_flow("Create New Envelope", log) as flow:
        await flow.step("Click Add", actions.click_element(add_btn, "Add"))
        await flow.step("Fill name", actions.fill_input(name_input, name, "Name"))
    return flow.result

On success the caller returns `flow.result`. On the first failing step a
FlowError is raised carrying the partial FlowResult. Nothing is rolled back.

================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Dict, List, Optional

import allure

from autotest_tools.common.structured_logger import StructuredLogger


@dataclass
class FlowResult:
    """Outcome of a named multi-step page operation."""
    name: str
    completed_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.failed_step is None and self.error is None


class FlowError(Exception):
    """Raised when a step of a page flow fails; `result` holds the partial progress."""

    def __init__(self, result: FlowResult):
        self.result = result
        super().__init__(
            f"{result.name} failed at step '{result.failed_step}' after "
            f"{len(result.completed_steps)} completed step(s): {result.error}"
        )


class Flow:
    """Step recorder used inside `run_flow`."""

    def __init__(self, name: str, logger: StructuredLogger):
        self.logger = logger
        self.result = FlowResult(name=name)

    async def step(self, name: str, action: Awaitable[Any]) -> Any:
        """
        Await one step of the flow.

        Args:
            name: Step label used in logs and in the FlowResult
            action: Awaitable performing the step

        Returns:
            Whatever the awaitable returns

        Raises:
            FlowError: the step failed; earlier steps stay recorded
        """
        with allure.step(name):
            try:
                value = await action
            except Exception as e:
                self.result.failed_step = name
                self.result.error = e
                raise FlowError(self.result) from e
        self.result.completed_steps.append(name)
        self.logger.step(name)
        return value


@asynccontextmanager
async def run_flow(
    name: str,
    logger: StructuredLogger,
    details: Optional[Dict[str, Any]] = None,
) -> AsyncIterator[Flow]:
    """Run a named flow, logging start, success and failure around it."""
    logger.action_start(name, details)
    flow = Flow(name, logger)
    with allure.step(name):
        try:
            yield flow
        except FlowError as e:
            logger.action_failure(name, e.result.error or e, {
                **(details or {}),
                "failed_step": e.result.failed_step,
                "completed_steps": e.result.completed_steps,
            })
            raise
        except Exception as e:
            flow.result.error = e
            logger.action_failure(name, e, details)
            raise
    logger.action_success(name, details)


__all__ = [
    "Flow",
    "FlowError",
    "FlowResult",
    "run_flow",
]
