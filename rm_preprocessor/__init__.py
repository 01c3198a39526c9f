#!filepath: rm_preprocessor/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.filesystem import FileSystem
from .config.app_config import AppConfig
from .config.preprocess_config import PreprocessConfig, resolve_config
from .pipeline.report import RunReport
from .workflows.preprocess_workflow import build_preprocess_pipeline, run_preprocess

__version__ = "0.1.0"

# alias
fs = FileSystem

__all__ = [
    "logs", "Logging", "init_logging",
    "fs",
    "AppConfig",
    "PreprocessConfig", "resolve_config",
    "RunReport", "build_preprocess_pipeline", "run_preprocess",
    "__version__",
]
