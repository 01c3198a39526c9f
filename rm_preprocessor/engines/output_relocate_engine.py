#!filepath: rm_preprocessor/engines/output_relocate_engine.py
from __future__ import annotations

import shutil
from collections import Counter
from pathlib import Path
from typing import Iterable, List

from rm_preprocessor.utils.filesystem import FileSystem
from rm_preprocessor import logs


class OutputRelocateEngine:
    """
    Moves converted ``.csv`` files into one flat output directory.

    Never overwrites: an existing destination raises FileExistsError.
    """

    CSV_SUFFIX = ".csv"

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def csv_for(self, dataset_file: str | Path) -> Path:
        return Path(dataset_file).with_suffix(self.CSV_SUFFIX)

    def destination_for(self, dataset_file: str | Path) -> Path:
        return self.output_dir / self.csv_for(dataset_file).name

    def prepare(self, dataset_files: Iterable[Path]) -> List[Path]:
        """
        Create the output directory and reject name collisions inside the
        batch before anything is moved.
        """
        dataset_files = list(dataset_files)
        names = Counter(self.csv_for(f).name for f in dataset_files)
        clashes = sorted(name for name, n in names.items() if n > 1)
        if clashes:
            raise FileExistsError(
                f"several datasets would be moved to the same file in {self.output_dir}: {', '.join(clashes)}"
            )

        FileSystem.ensure_dir(self.output_dir)
        return dataset_files

    def relocate(self, dataset_file: str | Path) -> Path:
        src = self.csv_for(dataset_file)
        dst = self.destination_for(dataset_file)

        if dst.exists():
            raise FileExistsError(f"cannot move {src}: {dst} already exists")
        if not src.is_file():
            raise FileNotFoundError(f"converted file missing: {src}")

        shutil.move(str(src), str(dst))
        logs.info(f"[OutputRelocate] {src} -> {dst}")
        return dst
