#!filepath: rm_preprocessor/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from rm_preprocessor.config.preprocess_config import PreprocessConfig
from rm_preprocessor.engines.dat_convert_engine import ConversionResult
from rm_preprocessor.pipeline.report import RunReport


@dataclass
class PipelineContext:
    """
    The only state passed between steps of one run.

    - the pipeline builds it
    - each step reads its upstream slot and fills its own
    - no business logic here
    """

    config: PreprocessConfig

    # -------- stage outputs --------
    archives: List[Path] = field(default_factory=list)
    datasets: List[Path] = field(default_factory=list)
    converted: List[ConversionResult] = field(default_factory=list)
    relocated: List[Path] = field(default_factory=list)

    report: RunReport = field(default_factory=RunReport)

    @property
    def root(self) -> Path:
        return self.config.root_directory
