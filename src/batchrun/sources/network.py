"""
Scripts fetched over a raw TCP connection.

The request is a literal HTTP/1.1 GET with ``Connection: Close``. The response
header block is read and thrown away up to the first blank (or lone ``\\r``)
line; everything after it is treated exactly like a script file.
"""
from __future__ import annotations

import socket
from typing import Iterable, Iterator, TextIO

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import NetworkConfig
from ..errors import ConnectError, ScriptReadError
from ..types import URLParts
from .base import command_lines


def build_request(parts: URLParts) -> bytes:
    return (
        f"GET {parts.path} HTTP/1.1\r\n"
        f"Host: {parts.host}\r\n"
        "Connection: Close\r\n\r\n"
    ).encode("ascii")


def skip_headers(lines: Iterable[str]) -> Iterator[str]:
    """Drop lines up to and including the blank line that ends the header block."""
    iterator = iter(lines)
    for header in iterator:
        if header in ("", "\n", "\r", "\r\n"):
            break
    yield from iterator


class NetworkSource:
    """Command lines from a script served at ``parts``."""

    def __init__(self, parts: URLParts, config: NetworkConfig | None = None) -> None:
        self._parts = parts
        self._config = config or NetworkConfig()

    @property
    def parts(self) -> URLParts:
        return self._parts

    def _connect(self) -> socket.socket:
        retrying = Retrying(
            stop=stop_after_attempt(self._config.max_connect_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    return socket.create_connection(
                        (self._parts.host, self._parts.port_number),
                        timeout=self._config.connect_timeout_seconds,
                    )
        except OSError as exc:
            raise ConnectError(self._parts.host, self._parts.port, exc.strerror or str(exc)) from exc
        raise ConnectError(self._parts.host, self._parts.port, "no connection attempt was made")

    def _open_stream(self, sock: socket.socket) -> TextIO:
        sock.sendall(build_request(self._parts))
        return sock.makefile("r", encoding=self._config.encoding, newline="")

    def __iter__(self) -> Iterator[str]:
        parts = self._parts
        sock = self._connect()
        with sock:
            try:
                stream = self._open_stream(sock)
            except OSError as exc:
                raise ConnectError(parts.host, parts.port, exc.strerror or str(exc)) from exc
            with stream:
                try:
                    yield from command_lines(skip_headers(stream))
                except OSError as exc:
                    raise ConnectError(parts.host, parts.port, exc.strerror or str(exc)) from exc
                except UnicodeDecodeError as exc:
                    raise ScriptReadError(
                        f"cannot decode script from {parts.host}:{parts.port}{parts.path}: {exc.reason}"
                    ) from exc
