#!filepath: rm_preprocessor/engines/archive_extract_engine.py
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import List, Union

from rm_preprocessor.utils.errors import ArchiveAlreadyExtractedError, UnsafeArchiveMemberError
from rm_preprocessor.utils.filesystem import FileSystem
from rm_preprocessor import logs


class ArchiveExtractEngine:
    """
    Zip extractor:
    - finds every *.zip under a tree
    - extracts one archive next to itself (destination = archive's directory)
    - refuses to overwrite: any existing member path -> ArchiveAlreadyExtractedError
    - refuses members that resolve outside the destination
    """

    SUFFIX = ".zip"

    def find_archives(self, root: Union[str, Path]) -> List[Path]:
        return FileSystem.walk_files(root, lambda p: p.suffix == self.SUFFIX)

    def extract(self, src: Union[str, Path]) -> Path:
        """
        Extract a single archive into its containing directory.

        Parameters
        ----------
        src: str | Path
            path of the .zip file

        Returns
        -------
        Path: the directory the archive was extracted into
        """
        src = Path(src)
        out_dir = src.parent

        with zipfile.ZipFile(src, mode="r") as archive:
            members = archive.infolist()
            self._check_destination(src, out_dir, members)

            logs.info(f"[ArchiveExtract] extracting {src} -> {out_dir}")
            archive.extractall(path=out_dir)

        logs.info(f"[ArchiveExtract] extracted {len(members)} entries from {src.name}")
        return out_dir

    # ---------------- internal ----------------

    @staticmethod
    def _check_destination(src: Path, out_dir: Path, members: List[zipfile.ZipInfo]) -> None:
        """
        Whole-archive pre-check, so a conflicting archive is never half
        extracted.
        """
        base = out_dir.resolve()

        for info in members:
            target = (base / info.filename).resolve()
            if target != base and base not in target.parents:
                raise UnsafeArchiveMemberError(src, info.filename)

            # a file standing where the archive needs a directory
            for parent in list(target.relative_to(base).parents)[:-1]:
                existing = base / parent
                if existing.exists() and not existing.is_dir():
                    raise ArchiveAlreadyExtractedError(src, existing)

            # directory entries may merge into existing directories
            if info.is_dir():
                if target.exists() and not target.is_dir():
                    raise ArchiveAlreadyExtractedError(src, target)
                continue

            if target.exists():
                raise ArchiveAlreadyExtractedError(src, target)
