"""Module for durable, append-only text logging.

Every entry is encoded, appended to a single file and synchronized to
storage before ``record`` returns, so nothing written is lost when the
process dies right after a call.
"""

import codecs
import os
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

import gin
import structlog

from filelog.logging.entry_formatter import format_entry
from filelog.logging.timestamps import local_now, render_timestamp, validate_pattern
from filelog.utils import (
    DEFAULT_DATE_FORMAT,
    FileOpenError,
    Severity,
    TextEncoding,
    WriteError,
    WriterClosedError,
    WriterConfig,
    load_encoding,
)

logger = structlog.get_logger()

PathLike = Union[str, Path]


class LogWriter:
    """Appends formatted entries to one file it exclusively owns.

    A writer is open from construction until ``close``; there is no way to
    reopen it. ``record`` holds a per-writer lock around the
    format/write/sync sequence, so threads sharing a writer get whole lines.
    Several processes appending to the same file are not coordinated.
    """

    def __init__(
        self,
        path: PathLike,
        encoding: Union[str, TextEncoding] = TextEncoding.UTF8,
        date_format: str = DEFAULT_DATE_FORMAT,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Open ``path`` for appending, creating the file if needed.

        Args:
            path: Path to the log file. Parent directories must exist.
            encoding: Text encoding of the written entries. Defaults to UTF-8.
            date_format: Date pattern for the entry timestamps.
            clock: Source of the current time. Defaults to local wall-clock time.

        Raises:
            ValueError: If the encoding is unsupported or the date format is invalid.
            FileOpenError: If the file cannot be opened for appending.
        """
        self._encoding = load_encoding(encoding)
        validate_pattern(date_format)
        self._date_format = date_format
        self._clock = clock or local_now
        self._lock = threading.Lock()
        self._path = str(path)

        try:
            handle = open(path, "ab", buffering=0)
        except (OSError, ValueError, TypeError) as e:
            logger.error("log_writer_open_failed", path=self._path, error=str(e))
            raise FileOpenError(self._path, str(e)) from e

        try:
            at_start = handle.tell() == 0
        except OSError as e:
            handle.close()
            logger.error("log_writer_open_failed", path=self._path, error=str(e))
            raise FileOpenError(self._path, str(e)) from e
        self._file = handle

        self._encoder = codecs.getincrementalencoder(self._encoding.codec)("strict")
        if not at_start:
            # BOM-carrying codecs emit the mark only at the start of the file
            self._encoder.setstate(0)

        logger.debug("log_writer_opened", path=self._path, encoding=self._encoding.codec)

    @classmethod
    def create(
        cls,
        path: PathLike,
        encoding: Union[str, TextEncoding] = TextEncoding.UTF8,
        date_format: str = DEFAULT_DATE_FORMAT,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "OpenResult":
        """Open a writer, reporting a failed open as a value instead of raising.

        Returns:
            OpenResult: Holds either the writer or the ``FileOpenError``.
        """
        try:
            return OpenResult(writer=cls(path, encoding=encoding, date_format=date_format, clock=clock))
        except FileOpenError as e:
            return OpenResult(error=e)

    @property
    def path(self) -> str:
        return self._path

    @property
    def encoding(self) -> TextEncoding:
        return self._encoding

    @property
    def date_format(self) -> str:
        return self._date_format

    @property
    def closed(self) -> bool:
        return self._file is None

    def record(
        self,
        message: str,
        source_file: str,
        source_line: int,
        function_name: str,
        severity: Severity,
    ) -> int:
        """Append one entry and synchronize it to storage.

        Args:
            message: Free-text message of the entry.
            source_file: Path of the calling file; only its base name is written.
            source_line: Calling line number.
            function_name: Calling function or context name.
            severity: Severity of the entry.

        Returns:
            int: Number of bytes appended.

        Raises:
            WriterClosedError: If the writer was already closed.
            WriteError: If the entry cannot be encoded, written or synchronized.
        """
        with self._lock:
            if self._file is None:
                raise WriterClosedError(self._path, "record called on a closed writer")

            timestamp = render_timestamp(self._clock(), self._date_format)
            entry = format_entry(message, source_file, source_line, function_name, severity, timestamp)

            encoder_state = self._encoder.getstate()
            try:
                data = self._encoder.encode(entry)
            except UnicodeEncodeError as e:
                logger.error("log_write_failed", path=self._path, stage="encode", error=str(e))
                raise WriteError(self._path, f"cannot encode entry as {self._encoding.codec}: {e}") from e

            written = 0
            view = memoryview(data)
            try:
                while written < len(data):
                    written += self._file.write(view[written:])
                os.fsync(self._file.fileno())
            except OSError as e:
                if written == 0:
                    # nothing reached the file, so a pending BOM is still pending
                    self._encoder.setstate(encoder_state)
                logger.error(
                    "log_write_failed", path=self._path, stage="write", written=written, error=str(e)
                )
                raise WriteError(self._path, str(e)) from e

        return len(data)

    def close(self) -> None:
        """Synchronize and release the file. Closing twice is a no-op.

        Raises:
            WriteError: If the final synchronize fails; the file is released anyway.
        """
        with self._lock:
            if self._file is None:
                return
            handle, self._file = self._file, None
            try:
                try:
                    os.fsync(handle.fileno())
                finally:
                    handle.close()
            except OSError as e:
                logger.error("log_write_failed", path=self._path, stage="close", error=str(e))
                raise WriteError(self._path, str(e)) from e

        logger.debug("log_writer_closed", path=self._path)

    def __enter__(self) -> "LogWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"LogWriter({self._path!r}, encoding={self._encoding.codec!r}, {state})"


@dataclass
class OpenResult:
    """Outcome of ``LogWriter.create``: a writer or the reason there is none."""

    writer: Optional[LogWriter] = None
    error: Optional[FileOpenError] = None

    @property
    def ok(self) -> bool:
        return self.writer is not None

    def unwrap(self) -> LogWriter:
        """Return the writer, raising the stored error if the open failed."""
        if self.writer is None:
            raise self.error
        return self.writer


@gin.configurable
def open_writer(path: PathLike, config: Optional[WriterConfig] = None) -> LogWriter:
    """Open a writer using a ``WriterConfig``.

    Args:
        path (PathLike): Path to the log file.
        config (Optional[WriterConfig], optional): Writer settings. Defaults to
            a ``WriterConfig`` built from the active gin bindings.

    Returns:
        LogWriter: The open writer.
    """
    if config is None:
        config = WriterConfig()
    return LogWriter(path, encoding=config.encoding, date_format=config.date_format)
