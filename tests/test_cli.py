from __future__ import annotations

import io
from pathlib import Path

import pytest

from batchrun.cli import main


def test_main_returns_zero_at_exit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    monkeypatch.delenv("BATCHRUN_PROMPT", raising=False)
    monkeypatch.setattr("sys.stdin", io.StringIO("# nothing to do\nexit\n"))

    assert main(["--dotenv", str(tmp_path / "missing.env")]) == 0
    assert capsys.readouterr().out == "> > "


def test_main_returns_one_when_spawn_failure_halts(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    monkeypatch.setenv("BATCHRUN_CONTINUE_ON_SPAWN_ERROR", "false")
    monkeypatch.setenv("BATCHRUN_PROMPT", "")
    monkeypatch.setattr("sys.stdin", io.StringIO("definitely-not-a-real-program-xyz\nexit\n"))

    assert main(["--dotenv", str(tmp_path / "missing.env")]) == 1
    out = capsys.readouterr().out
    assert "Running: definitely-not-a-real-program-xyz" in out
    assert "Spawn failed:" in out
    assert "Run halted." in out


def test_main_rejects_bad_configuration(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    monkeypatch.setenv("BATCHRUN_CONNECT_TIMEOUT", "soon")

    assert main(["--dotenv", str(tmp_path / "missing.env")]) == 2
    assert "Configuration error:" in capsys.readouterr().out
