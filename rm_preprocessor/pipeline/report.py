#!filepath: rm_preprocessor/pipeline/report.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass(frozen=True)
class ItemError:
    stage: str
    path: Path
    error_type: str
    message: str


@dataclass
class RunReport:
    """
    What a run did: per-stage counts + every per-item error.

    Fatal errors are raised, never stored here.
    """

    archives_found: int = 0
    archives_extracted: int = 0
    archives_skipped: int = 0
    archives_failed: int = 0
    datasets_found: int = 0
    datasets_converted: int = 0
    files_purged: int = 0
    files_relocated: int = 0
    dirs_pruned: int = 0
    errors: List[ItemError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, stage: str, path: Any, error_type: str, message: str) -> None:
        self.errors.append(ItemError(stage=stage, path=Path(path), error_type=error_type, message=message))

    def counts(self) -> Dict[str, int]:
        data = asdict(self)
        data.pop("errors")
        return data

    def summary(self) -> str:
        """One-line ``name=value`` rendering of the counts, for the run log."""
        parts = [f"{name}={value}" for name, value in self.counts().items()]
        parts.append(f"errors={len(self.errors)}")
        return " ".join(parts)
