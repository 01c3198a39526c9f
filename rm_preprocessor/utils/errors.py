# rm_preprocessor/utils/errors.py
from pathlib import Path
from typing import Sequence


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (paths, flags).
    Should NOT print traceback.
    """


class ConfigError(UserInputError):
    """Run configuration is incomplete, inconsistent or points nowhere."""


class PreprocessError(RuntimeError):
    """Base class for per-item failures raised by the engines."""


class ArchiveAlreadyExtractedError(PreprocessError):
    """
    An archive member would overwrite an existing path.

    Expected on re-runs: the archive is skipped, the pipeline continues.
    """

    def __init__(self, archive: Path, existing: Path):
        self.archive = Path(archive)
        self.existing = Path(existing)
        super().__init__(f"{self.archive}: {self.existing} already exists")

    def __reduce__(self):
        return self.__class__, (self.archive, self.existing)


class UnsafeArchiveMemberError(PreprocessError):
    """An archive member resolves outside of the extraction directory."""

    def __init__(self, archive: Path, member: str):
        self.archive = Path(archive)
        self.member = member
        super().__init__(f"{self.archive}: member {member!r} escapes the destination directory")

    def __reduce__(self):
        return self.__class__, (self.archive, self.member)


class AmbiguousMarkerError(PreprocessError):
    """More than one line of a dataset file contains the same marker."""

    def __init__(self, path: Path, marker: str, line_numbers: Sequence[int]):
        self.path = Path(path)
        self.marker = marker
        self.line_numbers = tuple(line_numbers)
        lines = ", ".join(str(n) for n in self.line_numbers)
        super().__init__(
            f"{self.path}: {len(self.line_numbers)} lines contain {marker!r} (lines {lines})"
        )

    def __reduce__(self):
        # keep the error picklable for process pools
        return self.__class__, (self.path, self.marker, self.line_numbers)
