from __future__ import annotations


class BatchRunError(RuntimeError):
    """Base class for every error raised by the runner."""


class TokenizeError(BatchRunError):
    """A command line could not be split into arguments."""


class URLFormatError(BatchRunError):
    """A script URL is missing its `//` marker, host, port digits or path."""


class SpawnError(BatchRunError):
    """The OS could not start a child process."""

    def __init__(self, argv: tuple[str, ...], reason: str) -> None:
        self.argv = argv
        self.reason = reason
        super().__init__(f"cannot run {argv[0] if argv else '<empty>'}: {reason}")


class ConnectError(BatchRunError):
    """The byte stream to a script host could not be opened or read."""

    def __init__(self, host: str, port: str, reason: str) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"{host}:{port}: {reason}")


class InvalidStateError(BatchRunError):
    """A child process was used out of order (wait before start, start twice)."""


class BatchHaltError(BatchRunError):
    """Raised when the configured policy says a failure ends the whole run."""

    def __init__(self, cause: BatchRunError) -> None:
        self.cause = cause
        super().__init__(str(cause))


class ScriptReadError(BatchRunError):
    """A local script file could not be opened or decoded."""
