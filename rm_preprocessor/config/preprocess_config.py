#!filepath: rm_preprocessor/config/preprocess_config.py
from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from rm_preprocessor.utils.errors import ConfigError


class PreprocessConfig(BaseModel):
    """
    Fully resolved input of one pipeline run.

    Frozen: steps may read it, nobody mutates it once the run starts.
    """

    model_config = ConfigDict(frozen=True)

    DAT_EXTENSION: ClassVar[str] = "dat"

    root_directory: Path
    delete_non_csv: bool = False
    move_files: bool = False
    output_directory: Optional[Path] = None

    max_workers: Optional[int] = Field(default=None, ge=1)
    use_processes: bool = False
    encoding: Optional[str] = None

    @property
    def dat_extension(self) -> str:
        return self.DAT_EXTENSION

    @model_validator(mode="after")
    def _output_required_when_moving(self) -> "PreprocessConfig":
        if self.move_files and self.output_directory is None:
            raise ValueError("move_files requires output_directory")
        return self

    def validate_paths(self) -> None:
        """
        Filesystem checks that must pass before any batch starts.
        """
        root = self.root_directory
        if not root.exists():
            raise ConfigError(f"root directory does not exist: {root}")
        if not root.is_dir():
            raise ConfigError(f"root directory is not a directory: {root}")

        out = self.output_directory
        if self.move_files and out is not None and out.exists() and not out.is_dir():
            raise ConfigError(f"output directory is not a directory: {out}")


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("y", "yes", "true", "1"):
            return True
        if v in ("n", "no", "false", "0", ""):
            return False
    if value is None:
        return False
    raise ConfigError(f"{name}: expected y/n, got {value!r}")


def resolve_config(raw: Mapping[str, Any], defaults: Mapping[str, Any] | None = None) -> PreprocessConfig:
    """
    Pure ``raw arguments -> PreprocessConfig`` resolution.

    ``raw`` may hold CLI strings ("y"/"n", paths) or already typed values;
    ``defaults`` (e.g. AppConfig.pipeline) fills the runtime knobs the caller
    left unset. Every problem is reported as a single ConfigError.
    """
    merged: dict[str, Any] = dict(defaults or {})
    merged.update({k: v for k, v in raw.items() if v is not None})

    root = merged.get("root_directory")
    if root is None or str(root).strip() == "":
        raise ConfigError("root directory is required")

    output = merged.get("output_directory")
    if output is not None and str(output).strip() == "":
        output = None

    encoding = merged.get("encoding")
    if encoding:
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ConfigError(f"unknown text encoding: {encoding!r}") from None

    values = {
        "root_directory": Path(str(root).strip()).expanduser(),
        "delete_non_csv": _as_bool("delete_non_csv", merged.get("delete_non_csv")),
        "move_files": _as_bool("move_files", merged.get("move_files")),
        "output_directory": Path(str(output).strip()).expanduser() if output is not None else None,
        "max_workers": merged.get("max_workers"),
        "use_processes": _as_bool("use_processes", merged.get("use_processes")),
        "encoding": encoding or None,
    }

    try:
        return PreprocessConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(problems) from e
