"""Append-only, timestamped text logging to a single file."""

from filelog.logging import LogWriter, OpenResult, format_entry, open_writer, parse_entry
from filelog.utils import (
    FileOpenError,
    FilelogError,
    Severity,
    TextEncoding,
    WriteError,
    WriterClosedError,
    WriterConfig,
)

__version__ = "0.1.0"

__all__ = [
    "FileOpenError",
    "FilelogError",
    "LogWriter",
    "OpenResult",
    "Severity",
    "TextEncoding",
    "WriteError",
    "WriterClosedError",
    "WriterConfig",
    "format_entry",
    "open_writer",
    "parse_entry",
]
