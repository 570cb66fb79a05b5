from __future__ import annotations

from typing import Iterable, Iterator, TextIO

from rich.console import Console
from rich.markup import escape

from ..config import AppConfig
from ..errors import BatchHaltError, ConnectError, ScriptReadError, TokenizeError, URLFormatError
from ..parsing import decompose_url, tokenize
from ..process import ChildProcess
from ..sources import ConsoleSource, FileSource, NetworkSource
from ..types import ArgumentVector, ScheduleMode
from .scheduler import ProcessFactory, Scheduler

URL_MARKER = "http"


class Session:
    """
    The read-dispatch loop behind the prompt.

    Each console line is one of:

    * ``SERIAL|PARALLEL <url>``: the second token contains ``http``; the script is
      fetched over the network and run in that mode.
    * ``SERIAL|PARALLEL <path>``: the script file is run in that mode.
    * anything else: the whole line is one command, run and waited on directly.

    The mode token is checked first, so ``curl http://host/`` is a direct
    command and a line is never dispatched twice.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        console: Console | None = None,
        *,
        stdin: TextIO | None = None,
        process_factory: ProcessFactory = ChildProcess,
    ) -> None:
        self._config = config or AppConfig()
        self._console = console or Console()
        self._stdin = stdin
        self._scheduler = Scheduler(
            self._console,
            process_factory=process_factory,
            continue_on_spawn_error=self._config.continue_on_spawn_error,
        )

    def _error(self, kind: str, exc: Exception) -> None:
        self._console.print(f"[red]{kind}:[/red] {escape(str(exc))}", soft_wrap=True)

    def _tokenize(self, line: str) -> ArgumentVector:
        return tokenize(line, unterminated=self._config.unterminated_quote)

    def _vectors(self, lines: Iterable[str]) -> Iterator[ArgumentVector]:
        for line in lines:
            try:
                argv = self._tokenize(line)
            except TokenizeError as exc:
                self._error("Tokenize error", exc)
                continue
            if argv:
                yield argv

    def run(self) -> None:
        """Process console lines until ``exit`` or end of input."""
        source = ConsoleSource(self._config.prompt, console=self._console, stream=self._stdin)
        for line in source:
            self.handle_line(line)

    def handle_line(self, line: str) -> None:
        try:
            argv = self._tokenize(line)
        except TokenizeError as exc:
            self._error("Tokenize error", exc)
            return
        if not argv:
            return

        mode = ScheduleMode.parse(argv[0])
        if mode is None:
            self._scheduler.run([argv], ScheduleMode.SERIAL)
            return

        if len(argv) != 2:
            self._console.print(
                f"[yellow]Usage:[/yellow] {mode.value} <script file or URL>", soft_wrap=True
            )
            return

        target = argv[1]
        if URL_MARKER in target:
            self.run_url(mode, target)
        else:
            self.run_file(mode, target)

    def run_file(self, mode: ScheduleMode, path: str) -> None:
        try:
            self._scheduler.run(self._vectors(FileSource(path)), mode)
        except ScriptReadError as exc:
            self._error("Script error", exc)

    def run_url(self, mode: ScheduleMode, url: str) -> None:
        try:
            parts = decompose_url(url)
        except URLFormatError as exc:
            self._error("Bad URL", exc)
            return

        source = NetworkSource(parts, self._config.network)
        try:
            self._scheduler.run(self._vectors(source), mode)
        except ConnectError as exc:
            self._error("Connect failed", exc)
            if not self._config.continue_on_connect_error:
                raise BatchHaltError(exc) from exc
        except ScriptReadError as exc:
            self._error("Script error", exc)
