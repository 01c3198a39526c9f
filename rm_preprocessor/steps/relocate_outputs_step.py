# rm_preprocessor/steps/relocate_outputs_step.py
from __future__ import annotations

from rm_preprocessor.engines.output_relocate_engine import OutputRelocateEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.parallel.executor import ParallelExecutor
from rm_preprocessor.pipeline.parallel.types import ParallelKind
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor import logs


class RelocateOutputsStep(PipelineStep):
    """
    Moves the csv files converted in this run into the output directory.

    Fail fast: a destination that already exists aborts the run, nothing
    is overwritten.
    """

    stage = "relocate"

    def __init__(self, inst=None, max_workers: int | None = None, use_processes: bool = False):
        super().__init__(inst)
        self.max_workers = max_workers
        self.use_processes = use_processes

    def enabled(self, ctx: PipelineContext) -> bool:
        return ctx.config.move_files and ctx.config.output_directory is not None

    def run(self, ctx: PipelineContext) -> PipelineContext:
        cfg = ctx.config
        engine = OutputRelocateEngine(cfg.output_directory)

        if not ctx.converted:
            logs.info(f"[{self.step_name}] nothing to move")
            return ctx

        sources = engine.prepare(r.source for r in ctx.converted)

        with self.inst.timer(f"{self.stage} parallel"):
            outcomes = ParallelExecutor.run(
                kind=ParallelKind.RELOCATE,
                items=sources,
                handler=engine.relocate,
                max_workers=cfg.max_workers if cfg.max_workers is not None else self.max_workers,
                use_processes=cfg.use_processes or self.use_processes,
                fail_fast=True,
            )

        ctx.relocated = [o.value for o in outcomes]
        ctx.report.files_relocated = len(ctx.relocated)
        logs.info(f"[{self.step_name}] moved {len(ctx.relocated)} files to {cfg.output_directory}")
        return ctx
