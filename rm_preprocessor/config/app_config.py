#!filepath: rm_preprocessor/config/app_config.py
import yaml
from pydantic import BaseModel
from dotenv import load_dotenv
import os

from .log_config import LogConfig
from .pipeline_config import PipelineConfig


def package_root() -> str:
    """
    Package directory (derived from this file's location):
    rm_preprocessor/config/app_config.py -> rm_preprocessor/config -> rm_preprocessor
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


# env var -> (section, key)
ENV_OVERRIDES = {
    "RMPREP_LOG_DIR": ("log", "dir"),
    "RMPREP_LOG_LEVEL": ("log", "level"),
    "RMPREP_MAX_WORKERS": ("pipeline", "max_workers"),
}


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    pipeline: PipelineConfig = PipelineConfig()

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        Load YAML settings + .env
        - defaults to rm_preprocessor/config/base.yml
        - .env is looked up in the current working directory
        - RMPREP_* environment variables override the YAML values
        """
        # 1) .env first, so RMPREP_* from it are visible below
        load_dotenv(env_file or os.path.join(os.getcwd(), ".env"))

        # 2) config file path
        if path is None:
            path = os.path.join(package_root(), "config", "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) inject environment overrides
        for var, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(var)
            if value:
                raw.setdefault(section, {})[key] = value

        return cls(**raw)
