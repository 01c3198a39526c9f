#!filepath: rm_preprocessor/workflows/preprocess_workflow.py
from __future__ import annotations

from rm_preprocessor.config.app_config import AppConfig
from rm_preprocessor.config.preprocess_config import PreprocessConfig
from rm_preprocessor.observability.instrumentation import Instrumentation, NoOpInstrumentation
from rm_preprocessor.pipeline.pipeline import PreprocessPipeline
from rm_preprocessor.pipeline.report import RunReport

from rm_preprocessor.steps.extract_archives_step import ExtractArchivesStep
from rm_preprocessor.steps.locate_datasets_step import LocateDatasetsStep
from rm_preprocessor.steps.convert_datasets_step import ConvertDatasetsStep
from rm_preprocessor.steps.purge_non_csv_step import PurgeNonCsvStep
from rm_preprocessor.steps.relocate_outputs_step import RelocateOutputsStep
from rm_preprocessor.steps.prune_empty_dirs_step import PruneEmptyDirsStep
from rm_preprocessor import logs


def build_preprocess_pipeline(
        app: AppConfig | None = None,
        inst: Instrumentation | NoOpInstrumentation | None = None,
) -> PreprocessPipeline:
    """
    Preprocess pipeline

    Order:
        ExtractArchives   (parallel, per archive)
        → LocateDatasets  (<dir>/<dir>.dat)
        → ConvertDatasets (parallel, per dataset)
        → PurgeNonCsv     (optional)
        → RelocateOutputs (optional, parallel, fail fast)
        → PruneEmptyDirs  (bottom-up, root kept)

    Each stage waits for the whole previous batch.
    """
    app = app or AppConfig()
    if inst is None:
        inst = Instrumentation() if app.pipeline.instrumentation else NoOpInstrumentation()

    workers = app.pipeline.max_workers
    processes = app.pipeline.use_processes

    steps = [
        ExtractArchivesStep(inst=inst, max_workers=workers, use_processes=processes),
        LocateDatasetsStep(inst=inst),
        ConvertDatasetsStep(inst=inst, max_workers=workers, use_processes=processes),
        PurgeNonCsvStep(inst=inst),
        RelocateOutputsStep(inst=inst, max_workers=workers, use_processes=processes),
        PruneEmptyDirsStep(inst=inst),
    ]
    return PreprocessPipeline(steps=steps, inst=inst)


@logs.catch("preprocess run aborted")
def run_preprocess(
        config: PreprocessConfig,
        app: AppConfig | None = None,
        inst: Instrumentation | NoOpInstrumentation | None = None,
) -> RunReport:
    """
    Run the whole pipeline synchronously for one resolved configuration.

    Per-file problems end up in the returned report; configuration errors,
    a missing root and relocation conflicts are raised.
    """
    return build_preprocess_pipeline(app=app, inst=inst).run(config)
