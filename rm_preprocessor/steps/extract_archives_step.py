# rm_preprocessor/steps/extract_archives_step.py
from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from rm_preprocessor.engines.archive_extract_engine import ArchiveExtractEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.parallel.executor import ParallelExecutor
from rm_preprocessor.pipeline.parallel.types import ParallelKind
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor.utils.errors import ArchiveAlreadyExtractedError
from rm_preprocessor import logs


class ArchiveStatus(str, Enum):
    EXTRACTED = "extracted"
    SKIPPED = "skipped"


def _extract_one_archive(archive: Path) -> ArchiveStatus:
    """
    Extraction worker (thread or process).

    - "already extracted" is expected on re-runs: warn and skip
    - anything else is logged with its traceback and re-raised, the
      executor turns it into a failed outcome
    """
    try:
        ArchiveExtractEngine().extract(archive)
    except ArchiveAlreadyExtractedError as e:
        logs.warning(f"[ExtractArchives] {archive} already extracted ({e.existing} exists) -> skip")
        return ArchiveStatus.SKIPPED
    except Exception:
        logs.exception(f"[ExtractArchives] pid={os.getpid()} failed to extract {archive}")
        raise
    return ArchiveStatus.EXTRACTED


class ExtractArchivesStep(PipelineStep):
    """
    Unpacks every zip archive of the tree next to itself.

    Parallel unit: one archive. Archives are assumed to target disjoint
    paths, nothing is locked.
    """

    stage = "extract"

    def __init__(self, inst=None, max_workers: int | None = None, use_processes: bool = False):
        super().__init__(inst)
        self.max_workers = max_workers
        self.use_processes = use_processes

    def run(self, ctx: PipelineContext) -> PipelineContext:
        cfg = ctx.config
        engine = ArchiveExtractEngine()

        with self.inst.timer("find_archives"):
            ctx.archives = engine.find_archives(ctx.root)
        ctx.report.archives_found = len(ctx.archives)

        if not ctx.archives:
            logs.info(f"[{self.step_name}] no archives under {ctx.root}")
            return ctx

        with self.inst.timer(f"{self.stage} parallel"):
            outcomes = ParallelExecutor.run(
                kind=ParallelKind.ARCHIVE,
                items=ctx.archives,
                handler=_extract_one_archive,
                max_workers=cfg.max_workers if cfg.max_workers is not None else self.max_workers,
                use_processes=cfg.use_processes or self.use_processes,
            )

        for outcome in outcomes:
            if not outcome.ok:
                ctx.report.archives_failed += 1
            elif outcome.value == ArchiveStatus.SKIPPED:
                ctx.report.archives_skipped += 1
            else:
                ctx.report.archives_extracted += 1

        self.record_failures(ctx, outcomes)

        logs.info(
            f"[{self.step_name}] archives={len(ctx.archives)} "
            f"extracted={ctx.report.archives_extracted} skipped={ctx.report.archives_skipped} "
            f"failed={ctx.report.archives_failed}"
        )
        return ctx
