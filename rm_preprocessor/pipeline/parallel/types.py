# rm_preprocessor/pipeline/parallel/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ParallelKind(str, Enum):
    ARCHIVE = "archive"
    DATASET = "dataset"
    RELOCATE = "relocate"


@dataclass(frozen=True)
class ItemOutcome:
    """Result of one batch item: either ``value`` or the error it raised."""

    item: Any
    ok: bool
    value: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    exc: Optional[BaseException] = None

    @classmethod
    def success(cls, item: Any, value: Any) -> "ItemOutcome":
        return cls(item=item, ok=True, value=value)

    @classmethod
    def failure(cls, item: Any, exc: BaseException) -> "ItemOutcome":
        return cls(
            item=item,
            ok=False,
            error=str(exc),
            error_type=type(exc).__name__,
            exc=exc,
        )
