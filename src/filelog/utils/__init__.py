"""Module containing all utility functions."""

from filelog.utils.encoding_registry import load_encoding
from filelog.utils.structlog_utils import load_config, setup_structlog
from filelog.utils.utils import (
    DEFAULT_DATE_FORMAT,
    FileOpenError,
    FilelogError,
    LogEntry,
    Severity,
    TextEncoding,
    WriteError,
    WriterClosedError,
    WriterConfig,
)

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "FileOpenError",
    "FilelogError",
    "LogEntry",
    "Severity",
    "TextEncoding",
    "WriteError",
    "WriterClosedError",
    "WriterConfig",
    "load_config",
    "load_encoding",
    "setup_structlog",
]
