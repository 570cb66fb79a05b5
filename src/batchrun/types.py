from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Tuple

ArgumentVector = Tuple[str, ...]
"""Program name followed by its arguments. Always non-empty once built."""

LineKind = Literal["blank", "comment", "sentinel", "command"]

SENTINEL = "exit"
DEFAULT_PORT = "80"


class ScheduleMode(str, Enum):
    """When exit codes are collected relative to spawning."""

    SERIAL = "SERIAL"
    PARALLEL = "PARALLEL"

    @classmethod
    def parse(cls, token: str) -> "ScheduleMode | None":
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class URLParts:
    """Host, port and path pulled out of a script URL."""

    host: str
    port: str = DEFAULT_PORT
    path: str = "/"

    @property
    def port_number(self) -> int:
        return int(self.port)


def strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def classify_line(line: str) -> LineKind:
    """Classify one raw script line (line ending already removed)."""
    if not line.strip():
        return "blank"
    if line.startswith("#"):
        return "comment"
    if line == SENTINEL:
        return "sentinel"
    return "command"
