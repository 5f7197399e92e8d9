"""Module containing entry formatting and the file writer."""

from filelog.logging.entry_formatter import base_file_name, format_entry, parse_entry
from filelog.logging.file_logger import LogWriter, OpenResult, open_writer
from filelog.logging.timestamps import current_timestamp, render_timestamp

__all__ = [
    "LogWriter",
    "OpenResult",
    "base_file_name",
    "current_timestamp",
    "format_entry",
    "open_writer",
    "parse_entry",
    "render_timestamp",
]
