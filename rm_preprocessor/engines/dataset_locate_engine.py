#!filepath: rm_preprocessor/engines/dataset_locate_engine.py
from __future__ import annotations

from pathlib import Path
from typing import List

from rm_preprocessor.utils.filesystem import FileSystem


class DatasetLocateEngine:
    """
    Finds canonical dataset files: ``<dir>/<dir>.<extension>``.

    Any other file with the extension is ignored, a directory contributes
    at most one dataset.
    """

    def __init__(self, extension: str = "dat"):
        self.suffix = f".{extension.lstrip('.')}"

    def is_dataset_file(self, path: Path) -> bool:
        return path.suffix == self.suffix and path.stem == path.parent.name

    def find_dataset_files(self, root: str | Path) -> List[Path]:
        return FileSystem.walk_files(root, self.is_dataset_file)
