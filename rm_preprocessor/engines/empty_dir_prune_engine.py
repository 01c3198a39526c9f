#!filepath: rm_preprocessor/engines/empty_dir_prune_engine.py
from __future__ import annotations

from pathlib import Path
from typing import List

from rm_preprocessor.utils.filesystem import FileSystem
from rm_preprocessor import logs


class EmptyDirPruneEngine:
    """
    Bottom-up removal of empty directories below ``root``.

    Children are pruned before their parent is tested, so a chain of
    nested empty directories disappears in one pass. ``root`` itself is
    never removed.
    """

    def prune(self, root: str | Path) -> List[Path]:
        removed: List[Path] = []

        for d in FileSystem.list_dirs(root):
            removed.extend(self.prune(d))

            if FileSystem.is_empty_dir(d):
                d.rmdir()
                removed.append(d)
                logs.debug(f"[EmptyDirPrune] removed {d}")

        return removed
