"""
Line tokenizer and URL decomposition.

Both helpers are pure: they never print and never touch the OS.
"""
from __future__ import annotations

from typing import List, Literal

from .errors import TokenizeError, URLFormatError
from .types import DEFAULT_PORT, ArgumentVector, URLParts

QUOTE = '"'
ESCAPE = "\\"


def tokenize(line: str, *, unterminated: Literal["error", "rest"] = "error") -> ArgumentVector:
    """
    Split ``line`` on whitespace, honouring double-quoted tokens.

    A token that starts with ``"`` runs to the matching unescaped ``"``; inside it
    a backslash takes the next character literally. A quote that appears in the
    middle of a bare word is an ordinary character.

    ``unterminated`` decides what happens when a quoted token never closes:
    ``"error"`` raises :class:`TokenizeError`, ``"rest"`` keeps everything up to
    the end of the line as the final token.
    """
    tokens: List[str] = []
    pos = 0
    length = len(line)

    while True:
        while pos < length and line[pos].isspace():
            pos += 1
        if pos >= length:
            break

        if line[pos] != QUOTE:
            start = pos
            while pos < length and not line[pos].isspace():
                pos += 1
            tokens.append(line[start:pos])
            continue

        opened_at = pos
        pos += 1
        chars: List[str] = []
        closed = False
        while pos < length:
            ch = line[pos]
            if ch == ESCAPE and pos + 1 < length:
                chars.append(line[pos + 1])
                pos += 2
                continue
            if ch == QUOTE:
                closed = True
                pos += 1
                break
            chars.append(ch)
            pos += 1

        if not closed and unterminated == "error":
            raise TokenizeError(f"unterminated quote at column {opened_at + 1}: {line!r}")
        tokens.append("".join(chars))

    return tuple(tokens)


def decompose_url(url: str) -> URLParts:
    """
    Break a ``scheme://host[:port]/path`` URL into its parts.

    >>> decompose_url("https://localhost:8080/~x/one.txt")
    URLParts(host='localhost', port='8080', path='/~x/one.txt')
    >>> decompose_url("ftp://files.example.edu/index.html")
    URLParts(host='files.example.edu', port='80', path='/index.html')
    """
    marker = url.find("//")
    if marker < 0:
        raise URLFormatError(f"missing '//' in URL: {url!r}")
    host_start = marker + 2

    path_start = url.find("/", host_start)
    if path_start < 0:
        raise URLFormatError(f"missing path after host in URL: {url!r}")

    port_pos = url.find(":", host_start, path_start)
    host_end = path_start if port_pos < 0 else port_pos

    host = url[host_start:host_end]
    if not host:
        raise URLFormatError(f"missing host in URL: {url!r}")

    port = DEFAULT_PORT
    if port_pos >= 0:
        port = url[port_pos + 1 : path_start]
        if not port.isdigit():
            raise URLFormatError(f"invalid port {port!r} in URL: {url!r}")

    return URLParts(host=host, port=port, path=url[path_start:])
