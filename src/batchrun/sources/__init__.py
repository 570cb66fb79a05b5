"""
Script sources: interactive console, local file, and network-fetched script.
"""
from .base import command_lines
from .console import ConsoleSource
from .file import FileSource
from .network import NetworkSource

__all__ = ["command_lines", "ConsoleSource", "FileSource", "NetworkSource"]
