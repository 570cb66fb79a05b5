from __future__ import annotations

from typing import Iterable, Iterator

from ..types import classify_line, strip_line_ending


def command_lines(raw_lines: Iterable[str]) -> Iterator[str]:
    """
    Yield the command lines of a script.

    Line endings are removed, blank and ``#`` lines are skipped, and iteration
    stops at the first ``exit`` line or when ``raw_lines`` runs out.
    """
    for raw in raw_lines:
        line = strip_line_ending(raw)
        kind = classify_line(line)
        if kind == "sentinel":
            return
        if kind == "command":
            yield line
