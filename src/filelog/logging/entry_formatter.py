"""Rendering and parsing of single log lines.

A line has the layout::

    <timestamp> | <LABEL> | <base file name>:<line> | <function> - <message>\\n
"""

from filelog.utils import LogEntry, Severity

DELIMITER = " | "
MESSAGE_SEPARATOR = " - "
LINE_TERMINATOR = "\n"


def base_file_name(path: str) -> str:
    """Return the last component of ``path``; both ``/`` and ``\\`` separate."""
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def format_entry(
    message: str,
    source_file: str,
    source_line: int,
    function_name: str,
    severity: Severity,
    timestamp: str,
) -> str:
    """Build one newline-terminated log line.

    Args:
        message (str): Free-text message, may be empty.
        source_file (str): Path of the calling file; only its base name is written.
        source_line (int): Calling line, non-negative.
        function_name (str): Calling function or context name.
        severity (Severity): Severity of the entry.
        timestamp (str): Pre-rendered timestamp.

    Returns:
        str: The formatted line.

    Raises:
        ValueError: If ``source_line`` is negative.
    """
    if source_line < 0:
        raise ValueError(f"source_line must be non-negative, got {source_line}")
    location = f"{base_file_name(source_file)}:{int(source_line)}"
    head = DELIMITER.join((timestamp, severity.label, location, function_name))
    return f"{head}{MESSAGE_SEPARATOR}{message}{LINE_TERMINATOR}"


def parse_entry(line: str) -> LogEntry:
    """Split a formatted line back into its fields.

    The message may contain any text; the function name and the fields
    before it must not contain the delimiters.

    Raises:
        ValueError: If the line does not have the entry layout.
    """
    if line.endswith(LINE_TERMINATOR):
        line = line[: -len(LINE_TERMINATOR)]
    parts = line.split(DELIMITER, 3)
    if len(parts) != 4:
        raise ValueError(f"Not a log entry: {line!r}")
    timestamp, label, location, rest = parts
    function_name, separator, message = rest.partition(MESSAGE_SEPARATOR)
    source_file, colon, source_line = location.rpartition(":")
    if not separator or not colon or not source_line.isdigit():
        raise ValueError(f"Not a log entry: {line!r}")
    return LogEntry(
        timestamp=timestamp,
        severity=Severity.from_label(label),
        source_file=source_file,
        source_line=int(source_line),
        function_name=function_name,
        message=message,
    )
