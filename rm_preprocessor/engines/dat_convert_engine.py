#!filepath: rm_preprocessor/engines/dat_convert_engine.py
from __future__ import annotations

import codecs
import locale
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from rm_preprocessor.utils.errors import AmbiguousMarkerError
from rm_preprocessor.utils.filesystem import FileSystem
from rm_preprocessor import logs


@dataclass(frozen=True)
class ConversionResult:
    source: Path
    target: Path
    header: Optional[str]
    rows: int


class DatConvertEngine:
    """
    RapidMiner ``.dat`` -> ``.csv``

    - attribute lines contain ``@`` and are dropped from the body
    - ``@inputs`` / ``@outputs`` lines, when both present exactly once,
      become the header ``"<inputs>, <outputs>"``
    - data lines are passed through untouched (no quoting, no re-splitting)
    - output is written next to the source as ``<stem>.csv``
    """

    ATTRIBUTE_CHAR = "@"
    INPUTS_MARKER = "@inputs"
    OUTPUTS_MARKER = "@outputs"
    TARGET_SUFFIX = ".csv"

    def __init__(self, encoding: str | None = None):
        self.encoding = encoding

    # ------------------------------------------------------------------
    def convert(self, path: str | Path) -> ConversionResult:
        path = Path(path)
        lines = self.read_lines(path)

        header = self.build_header(path, lines)
        body = self.select_body(lines)
        out_lines = [header, *body] if header is not None else body

        target = path.with_suffix(self.TARGET_SUFFIX)
        self.write_lines(target, out_lines)

        logs.info(
            f"[DatConvert] {path.name} -> {target.name} "
            f"rows={len(body)} header={'yes' if header is not None else 'no'}"
        )
        return ConversionResult(source=path, target=target, header=header, rows=len(body))

    # ------------------------------------------------------------------
    def select_body(self, lines: Sequence[str]) -> List[str]:
        return [line for line in lines if self.ATTRIBUTE_CHAR not in line]

    def build_header(self, path: Path, lines: Sequence[str]) -> Optional[str]:
        inputs = self.find_marker(path, lines, self.INPUTS_MARKER)
        outputs = self.find_marker(path, lines, self.OUTPUTS_MARKER)

        if inputs is None or outputs is None:
            return None
        return f"{inputs}, {outputs}"

    @staticmethod
    def find_marker(path: Path, lines: Sequence[str], marker: str) -> Optional[str]:
        """
        Text of the single line containing ``marker`` with the marker removed.

        0 matches -> None, 1 match -> text, more -> AmbiguousMarkerError.
        """
        hits = [i for i, line in enumerate(lines, start=1) if marker in line]

        if not hits:
            return None
        if len(hits) > 1:
            raise AmbiguousMarkerError(path, marker, hits)

        return lines[hits[0] - 1].replace(marker, "").strip()

    # ------------------------------------------------------------------
    def read_lines(self, path: Path) -> List[str]:
        # universal newlines: \n, \r\n and \r all end a line
        with open(path, "r", encoding=self._read_encoding()) as f:
            return [line.rstrip("\n") for line in f]

    def write_lines(self, target: Path, lines: Sequence[str]) -> None:
        data = "".join(line + os.linesep for line in lines)
        FileSystem.safe_write(target, data.encode(self._encoding()))

    def _encoding(self) -> str:
        return self.encoding or locale.getpreferredencoding(False)

    def _read_encoding(self) -> str:
        # a leading UTF-8 byte-order mark is not part of the first line
        enc = self._encoding()
        if codecs.lookup(enc).name == "utf-8":
            return "utf-8-sig"
        return enc
