#!filepath: rm_preprocessor/engines/non_csv_purge_engine.py
from __future__ import annotations

from pathlib import Path
from typing import List

from rm_preprocessor.utils.filesystem import FileSystem
from rm_preprocessor import logs


class NonCsvPurgeEngine:
    """
    Deletes every file under a tree whose suffix is not exactly ``.csv``.

    Irreversible and unconditional: sources, extracted archives and any
    unrelated file go as well.
    """

    KEEP_SUFFIX = ".csv"

    def purge(self, root: str | Path) -> List[Path]:
        root = Path(root)
        removed: List[Path] = []

        for f in FileSystem.scan_dir(root):
            if f.suffix == self.KEEP_SUFFIX:
                continue
            f.unlink()
            removed.append(f)
            logs.info(f"[NonCsvPurge] deleted {f}")

        for d in FileSystem.list_dirs(root):
            removed.extend(self.purge(d))

        return removed
