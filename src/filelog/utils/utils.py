"""Utility classes."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict

import gin

DEFAULT_DATE_FORMAT = "yyyy-MM-dd'T'HH:mm:ss.SSSZ"


class Severity(Enum):
    """Importance level of a log entry."""

    VERBOSE = "verbose"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Text written to the severity field of an entry."""
        return self.name

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        """Look up a severity by its output label.

        Raises:
            ValueError: If the label does not belong to any severity.
        """
        try:
            return cls[label]
        except KeyError:
            raise ValueError(f"Unknown severity label: {label!r}") from None

    def __str__(self) -> str:
        return self.label


class TextEncoding(Enum):
    """Text encodings a writer can emit; values are Python codec names."""

    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"
    UTF32 = "utf-32"
    ASCII = "ascii"
    LATIN1 = "latin-1"
    CP1252 = "cp1252"

    @property
    def codec(self) -> str:
        return self.value


@dataclass
class LogEntry:
    """Fields of one log line, as recovered by ``parse_entry``."""

    timestamp: str
    severity: Severity
    source_file: str
    source_line: int
    function_name: str
    message: str

    @property
    def location(self) -> str:
        return f"{self.source_file}:{self.source_line}"


@gin.configurable
@dataclass
class WriterConfig:
    """Writer configuration parameters."""

    encoding: str = TextEncoding.UTF8.value
    date_format: str = DEFAULT_DATE_FORMAT

    def to_dict(self) -> Dict:
        """Convert config to dictionary."""
        return asdict(self)


class FilelogError(Exception):
    """Base class for errors raised by filelog."""

    def __init__(self, path: str, error_msg: str = ""):
        """Filelog error exception class.

        Args:
            path (str): Log file the failing operation targeted.
            error_msg (str, optional): Error message. Defaults to "".
        """
        self.path = path
        self.error_msg = error_msg
        super().__init__(path, error_msg)

    def __str__(self) -> str:
        return f"{self.path}: {self.error_msg}" if self.error_msg else self.path


class FileOpenError(FilelogError):
    """The log file could not be opened for appending."""


class WriteError(FilelogError):
    """An entry could not be encoded, written or synchronized."""


class WriterClosedError(WriteError):
    """An entry was recorded on a writer that was already closed."""
