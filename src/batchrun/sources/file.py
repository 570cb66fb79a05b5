from __future__ import annotations

from pathlib import Path
from typing import Iterator

from ..errors import ScriptReadError
from .base import command_lines


class FileSource:
    """Command lines read lazily from a local script file."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def __iter__(self) -> Iterator[str]:
        try:
            handle = self._path.open("r", encoding=self._encoding, newline="")
        except OSError as exc:
            raise ScriptReadError(f"cannot open script {self._path}: {exc.strerror or exc}") from exc

        with handle:
            try:
                yield from command_lines(handle)
            except UnicodeDecodeError as exc:
                raise ScriptReadError(f"cannot decode script {self._path}: {exc.reason}") from exc
