from __future__ import annotations

import subprocess
from typing import Literal, Optional, Sequence

from .errors import InvalidStateError, SpawnError
from .types import ArgumentVector

ProcessState = Literal["not_started", "running", "exited"]


class ChildProcess:
    """
    One OS process started from an argument vector.

    ``wait`` reaps the process exactly once; later calls return the cached exit
    status. Use as a context manager so a child that is never waited on is
    still terminated and reaped.
    """

    def __init__(self) -> None:
        self._popen: Optional[subprocess.Popen] = None
        self._argv: ArgumentVector = ()
        self._exit_code: Optional[int] = None

    @property
    def state(self) -> ProcessState:
        if self._popen is None:
            return "not_started"
        if self._exit_code is None:
            return "running"
        return "exited"

    @property
    def argv(self) -> ArgumentVector:
        return self._argv

    @property
    def pid(self) -> Optional[int]:
        return self._popen.pid if self._popen is not None else None

    @property
    def exit_code(self) -> Optional[int]:
        return self._exit_code

    def start(self, argv: Sequence[str]) -> None:
        if self._popen is not None:
            raise InvalidStateError(f"process already started (pid {self._popen.pid})")
        vector: ArgumentVector = tuple(argv)
        if not vector:
            raise SpawnError(vector, "empty argument vector")

        try:
            self._popen = subprocess.Popen(list(vector))
        except FileNotFoundError as exc:
            raise SpawnError(vector, "executable not found") from exc
        except PermissionError as exc:
            raise SpawnError(vector, "permission denied") from exc
        except OSError as exc:
            raise SpawnError(vector, exc.strerror or str(exc)) from exc
        self._argv = vector

    def wait(self) -> int:
        if self._popen is None:
            raise InvalidStateError("wait() called before start()")
        if self._exit_code is None:
            self._exit_code = self._popen.wait()
        return self._exit_code

    def close(self) -> None:
        """Terminate the child if it is still running, then reap it."""
        if self._popen is None or self._exit_code is not None:
            return
        if self._popen.poll() is None:
            self._popen.kill()
        self._exit_code = self._popen.wait()

    def __enter__(self) -> "ChildProcess":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        return f"<ChildProcess argv={list(self._argv)!r} state={self.state}>"
