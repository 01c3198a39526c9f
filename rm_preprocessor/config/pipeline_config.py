# rm_preprocessor/config/pipeline_config.py
from typing import Optional

from pydantic import BaseModel, Field


class PipelineConfig(BaseModel):
    """Runtime knobs shared by every run (not part of a single run's input)."""

    max_workers: Optional[int] = Field(default=None, ge=1)
    use_processes: bool = False
    encoding: Optional[str] = None  # None -> platform default
    instrumentation: bool = True
