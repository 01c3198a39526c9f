#!filepath: rm_preprocessor/utils/filesystem.py
import os
from pathlib import Path
from typing import Callable, List, Optional

from rm_preprocessor import logs


class FileSystem:
    """
    Shared filesystem helpers
    - create directories on demand
    - atomic writes (tmp file -> replace)
    - recursive tree walks (symlinked directories are not followed)
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        Create the directory (and parents) if it does not exist.
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] created directory: {p}")
        return p

    @staticmethod
    def safe_write(path: str | Path, data: bytes) -> None:
        """
        Atomic write, an interrupted run never leaves a half-written file:
            1) write <name>.tmp next to the target
            2) replace the target with it
        """
        path = Path(path)
        FileSystem.ensure_dir(path.parent)

        tmp_path = path.with_name(path.name + ".tmp")

        with open(tmp_path, "wb") as f:
            f.write(data)
            logs.debug(f"[FS] wrote temp file: {tmp_path}")

        tmp_path.replace(path)
        logs.debug(f"[FS] atomic write done: {path}")

    @staticmethod
    def scan_dir(path: str | Path, suffix: Optional[str] = None) -> List[Path]:
        """
        Files directly under ``path`` (optionally filtered by suffix), sorted.
        """
        p = Path(path)
        if not p.exists():
            return []

        files = []
        for f in p.iterdir():
            if f.is_file():
                if suffix is None or f.suffix == suffix:
                    files.append(f)

        return sorted(files)

    @staticmethod
    def list_dirs(path: str | Path) -> List[Path]:
        """
        Immediate subdirectories of ``path``. Symlinks to directories are
        not reported, so recursive callers can never loop.
        """
        with os.scandir(path) as it:
            return [
                Path(entry.path)
                for entry in it
                if entry.is_dir(follow_symlinks=False)
            ]

    @staticmethod
    def is_empty_dir(path: str | Path) -> bool:
        """True when the directory holds no entry at all."""
        with os.scandir(path) as it:
            return next(it, None) is None

    @staticmethod
    def walk_files(
        root: str | Path,
        predicate: Callable[[Path], bool] | None = None,
    ) -> List[Path]:
        """
        Every file under ``root`` (any depth) accepted by ``predicate``.

        Order across sibling directories is unspecified.
        """
        root = Path(root).absolute()
        result: List[Path] = []

        with os.scandir(root) as it:
            entries = list(it)

        for entry in entries:
            if entry.is_file():
                p = Path(entry.path)
                if predicate is None or predicate(p):
                    result.append(p)

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                result.extend(FileSystem.walk_files(entry.path, predicate))

        return result
