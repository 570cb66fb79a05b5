from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console


# Ensure `import batchrun` works when running `pytest` from repo root without installing.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_ROOT))


class RecordingConsole(Console):
    """Console writing into memory so tests can read back exactly what was printed."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        super().__init__(file=self.buffer, width=200, color_system=None, force_terminal=False)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()
