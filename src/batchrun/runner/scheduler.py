from __future__ import annotations

from collections import deque
from contextlib import ExitStack
from typing import Callable, Deque, Iterable, Iterator, List

from rich.console import Console
from rich.markup import escape

from ..errors import BatchHaltError, BatchRunError, SpawnError
from ..process import ChildProcess
from ..types import ArgumentVector, ScheduleMode

ProcessFactory = Callable[[], ChildProcess]


class PendingQueue:
    """Spawned children awaiting ``wait()``, kept in spawn order."""

    def __init__(self) -> None:
        self._items: Deque[ChildProcess] = deque()

    def append(self, child: ChildProcess) -> None:
        self._items.append(child)

    def drain(self) -> Iterator[ChildProcess]:
        """Hand out children front-to-back, removing each one as it goes."""
        while self._items:
            yield self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


class Scheduler:
    """Spawn one child per argument vector and report exit codes in issue order."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        process_factory: ProcessFactory = ChildProcess,
        continue_on_spawn_error: bool = True,
    ) -> None:
        self._console = console or Console()
        self._process_factory = process_factory
        self._continue_on_spawn_error = continue_on_spawn_error

    def _print(self, text: str) -> None:
        self._console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def _spawn(self, argv: ArgumentVector) -> ChildProcess | None:
        self._print("Running: " + " ".join(argv))
        child = self._process_factory()
        try:
            child.start(argv)
        except SpawnError as exc:
            self._console.print(f"[red]Spawn failed:[/red] {escape(str(exc))}", soft_wrap=True)
            if not self._continue_on_spawn_error:
                raise BatchHaltError(exc) from exc
            return None
        return child

    def _collect(self, child: ChildProcess) -> int:
        try:
            code = child.wait()
        finally:
            child.close()
        self._print(f"Exit code: {code}")
        return code

    @staticmethod
    def _reclaim(queue: PendingQueue) -> None:
        for child in queue.drain():
            child.close()

    def run(
        self,
        vectors: Iterable[ArgumentVector],
        mode: ScheduleMode,
        pending: PendingQueue | None = None,
    ) -> List[int]:
        """
        Execute every vector and return the exit codes in the order they were printed.

        SERIAL waits on each child before spawning the next. PARALLEL spawns all of
        them first, then waits front-to-back, so the report order is the spawn
        order whatever order the children actually finish in.

        If reading ``vectors`` fails part way, the children already queued are
        still waited on and reported before the error propagates. Only a halt or
        an interrupt kills and reaps the children left in the queue.
        """
        queue = pending if pending is not None else PendingQueue()
        exit_codes: List[int] = []

        with ExitStack() as stack:
            stack.callback(self._reclaim, queue)
            try:
                for argv in vectors:
                    child = self._spawn(argv)
                    if child is None:
                        continue
                    if mode == ScheduleMode.SERIAL:
                        exit_codes.append(self._collect(child))
                    else:
                        queue.append(child)
            except BatchHaltError:
                raise
            except BatchRunError:
                exit_codes.extend(self._collect(child) for child in queue.drain())
                raise

            exit_codes.extend(self._collect(child) for child in queue.drain())

        return exit_codes
