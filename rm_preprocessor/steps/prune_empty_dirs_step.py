# rm_preprocessor/steps/prune_empty_dirs_step.py
from __future__ import annotations

from rm_preprocessor.engines.empty_dir_prune_engine import EmptyDirPruneEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor import logs


class PruneEmptyDirsStep(PipelineStep):
    """Removes directories left empty below the root (single-threaded)."""

    stage = "prune"

    def run(self, ctx: PipelineContext) -> PipelineContext:
        with self.inst.timer("prune_empty_dirs"):
            removed = EmptyDirPruneEngine().prune(ctx.root)

        ctx.report.dirs_pruned = len(removed)
        logs.info(f"[{self.step_name}] removed {len(removed)} empty directories")
        return ctx
