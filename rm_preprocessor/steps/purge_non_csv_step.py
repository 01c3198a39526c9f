# rm_preprocessor/steps/purge_non_csv_step.py
from __future__ import annotations

from rm_preprocessor.engines.non_csv_purge_engine import NonCsvPurgeEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor import logs


class PurgeNonCsvStep(PipelineStep):
    """Deletes everything but ``.csv`` files (only when configured)."""

    stage = "purge"

    def enabled(self, ctx: PipelineContext) -> bool:
        return ctx.config.delete_non_csv

    def run(self, ctx: PipelineContext) -> PipelineContext:
        logs.info(f"[{self.step_name}] deleting non .csv files under {ctx.root}")

        with self.inst.timer("purge_non_csv"):
            removed = NonCsvPurgeEngine().purge(ctx.root)

        ctx.report.files_purged = len(removed)
        logs.info(f"[{self.step_name}] deleted {len(removed)} files")
        return ctx
