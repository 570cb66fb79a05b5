from __future__ import annotations

from typing import Iterator, TextIO

from rich.console import Console

from .base import command_lines


class ConsoleSource:
    """Interactive lines: the prompt is printed before every read."""

    def __init__(
        self,
        prompt: str = "> ",
        console: Console | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._prompt = prompt
        self._console = console or Console()
        self._stream = stream

    def _raw_lines(self) -> Iterator[str]:
        while True:
            try:
                line = self._console.input(
                    self._prompt, markup=False, emoji=False, stream=self._stream
                )
            except EOFError:
                return
            # readline() signals end of input with an empty string; input() raises instead.
            if self._stream is not None and not line:
                return
            yield line

    def __iter__(self) -> Iterator[str]:
        return command_lines(self._raw_lines())
