# rm_preprocessor/steps/convert_datasets_step.py
from __future__ import annotations

import os
from functools import partial
from pathlib import Path

from rm_preprocessor.engines.dat_convert_engine import ConversionResult, DatConvertEngine
from rm_preprocessor.pipeline.context import PipelineContext
from rm_preprocessor.pipeline.parallel.executor import ParallelExecutor
from rm_preprocessor.pipeline.parallel.types import ParallelKind
from rm_preprocessor.pipeline.step import PipelineStep
from rm_preprocessor.utils.errors import AmbiguousMarkerError
from rm_preprocessor import logs


def _convert_one_dataset(path: Path, encoding: str | None = None) -> ConversionResult:
    """
    Conversion worker (thread or process).

    Constraints:
      - touches only ``path`` and its sibling .csv
      - builds its own engine, shares nothing
    """
    try:
        return DatConvertEngine(encoding=encoding).convert(path)
    except AmbiguousMarkerError as e:
        logs.error(f"[ConvertDatasets] ambiguous markers, no csv written: {e}")
        raise
    except Exception:
        logs.exception(f"[ConvertDatasets] pid={os.getpid()} failed to convert {path}")
        raise


class ConvertDatasetsStep(PipelineStep):
    """
    Converts every located dataset to csv.

    Parallel unit: one dataset file. A failing file is reported and
    skipped, the rest of the batch carries on.
    """

    stage = "convert"

    def __init__(self, inst=None, max_workers: int | None = None, use_processes: bool = False):
        super().__init__(inst)
        self.max_workers = max_workers
        self.use_processes = use_processes

    def run(self, ctx: PipelineContext) -> PipelineContext:
        cfg = ctx.config

        if not ctx.datasets:
            logs.info(f"[{self.step_name}] no datasets to convert")
            return ctx

        with self.inst.timer(f"{self.stage} parallel"):
            outcomes = ParallelExecutor.run(
                kind=ParallelKind.DATASET,
                items=ctx.datasets,
                handler=partial(_convert_one_dataset, encoding=cfg.encoding),
                max_workers=cfg.max_workers if cfg.max_workers is not None else self.max_workers,
                use_processes=cfg.use_processes or self.use_processes,
            )

        ctx.converted = [o.value for o in outcomes if o.ok]
        ctx.report.datasets_converted = len(ctx.converted)
        self.record_failures(ctx, outcomes)

        logs.info(
            f"[{self.step_name}] converted={len(ctx.converted)} "
            f"failed={len(outcomes) - len(ctx.converted)}"
        )
        return ctx
