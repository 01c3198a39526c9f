from __future__ import annotations

from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.parallel.types import ItemOutcome
from rm_preprocessor.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    Pipeline step base class.

    Responsibilities:
      1. orchestration of one stage (loop / fan-out / conditions)
      2. step-level time boundary (parent scope)

    Rules:
      - the step itself is not in the timeline, leaf timers inside it are
      - instrumentation is optional; behaviour never depends on it
      - engines hold the per-item logic, steps never touch file contents
    """

    stage: str = ''

    def __init__(self, inst: Instrumentation | None = None):
        # inst is always usable (no-op semantics)
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """Class name by default."""
        return self.__class__.__name__

    def timed(self):
        """Step-level wall-time boundary, not recorded."""
        return self.inst.timer(self.step_name, record=False)

    def enabled(self, ctx: PipelineContext) -> bool:
        return True

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """
        Subclasses implement this.
        """
        raise NotImplementedError

    # --------------------------------------------------
    # helpers for batch steps
    # --------------------------------------------------
    def record_failures(self, ctx: PipelineContext, outcomes: list[ItemOutcome]) -> None:
        """
        Store every failed item of a collect-mode batch in the run report.
        Workers log their own failures, with the detail only they have.
        """
        for outcome in outcomes:
            if outcome.ok:
                continue
            ctx.report.add_error(self.stage, outcome.item, outcome.error_type, outcome.error)
