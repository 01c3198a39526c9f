#!filepath: rm_preprocessor/pipeline/pipeline.py
from __future__ import annotations

from rm_preprocessor.config.preprocess_config import PreprocessConfig
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.report import RunReport
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor import logs
from rm_preprocessor.observability.instrumentation import Instrumentation, NoOpInstrumentation


class PreprocessPipeline:
    """
    PreprocessPipeline = scheduler

    Rules:
    - the pipeline owns ordering and the context
    - the pipeline does no step-level timing
    - structural checks run before the first step
    - a step raising aborts the run (fatal); per-item errors live in the report
    """

    def __init__(
            self,
            steps: list[PipelineStep],
            inst: Instrumentation | NoOpInstrumentation | None = None,
    ):
        self.steps = steps
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def run(self, config: PreprocessConfig) -> RunReport:
        config.validate_paths()

        logs.info(f"[Pipeline] ====== START {config.root_directory} ======")

        ctx = PipelineContext(config=config)

        for step in self.steps:
            if not step.enabled(ctx):
                logs.info(f"[Pipeline] {step.step_name} disabled -> skip")
                continue
            with step.timed():
                ctx = step.run(ctx)

        report = ctx.report
        self.inst.generate_timeline_report(str(config.root_directory))

        logs.info(f"[Pipeline] ====== DONE {config.root_directory} {report.summary()} ======")
        return report
