# rm_preprocessor/steps/locate_datasets_step.py
from __future__ import annotations

from rm_preprocessor.engines.dataset_locate_engine import DatasetLocateEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor import logs


class LocateDatasetsStep(PipelineStep):
    """Collects the canonical ``<dir>/<dir>.dat`` files of the tree."""

    stage = "locate"

    def run(self, ctx: PipelineContext) -> PipelineContext:
        engine = DatasetLocateEngine(ctx.config.dat_extension)

        with self.inst.timer("find_datasets"):
            ctx.datasets = engine.find_dataset_files(ctx.root)

        ctx.report.datasets_found = len(ctx.datasets)
        logs.info(f"[{self.step_name}] files found: {len(ctx.datasets)}")
        return ctx
