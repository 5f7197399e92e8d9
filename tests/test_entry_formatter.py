from __future__ import annotations

import pytest

from filelog.logging.entry_formatter import base_file_name, format_entry, parse_entry
from filelog.utils import Severity

TIMESTAMP = "2024-01-15T10:30:00.000+0000"


def test_format_matches_documented_layout():
    line = format_entry(
        "connection refused", "/srv/app/server.ext", 42, "handleRequest", Severity.ERROR, TIMESTAMP
    )
    assert line == "2024-01-15T10:30:00.000+0000 | ERROR | server.ext:42 | handleRequest - connection refused\n"


def test_line_ends_with_exactly_one_newline():
    for severity in Severity:
        line = format_entry("msg", "a.ext", 1, "fn", severity, TIMESTAMP)
        assert line.endswith("\n")
        assert not line.endswith("\n\n")
        assert line.count("\n") == 1


def test_labels():
    labels = [s.label for s in Severity]
    assert labels == ["VERBOSE", "DEBUG", "INFO", "WARNING", "ERROR"]


def test_empty_message_keeps_separator():
    line = format_entry("", "main.ext", 3, "start", Severity.INFO, TIMESTAMP)
    assert line.endswith("| start - \n")


def test_line_number_is_plain_decimal():
    line = format_entry("m", "main.ext", 7, "f", Severity.DEBUG, TIMESTAMP)
    assert "| main.ext:7 |" in line
    line = format_entry("m", "main.ext", 0, "f", Severity.DEBUG, TIMESTAMP)
    assert "| main.ext:0 |" in line


def test_negative_line_rejected():
    with pytest.raises(ValueError):
        format_entry("m", "main.ext", -1, "f", Severity.DEBUG, TIMESTAMP)


@pytest.mark.parametrize(
    "path",
    ["/a/b/c/server.ext", "server.ext", "relative/dir/server.ext", "C:\\build\\src\\server.ext"],
)
def test_base_file_name(path):
    assert base_file_name(path) == "server.ext"
    line = format_entry("m", path, 42, "f", Severity.INFO, TIMESTAMP)
    assert line.split(" | ")[2] == "server.ext:42"


def test_formatting_is_idempotent():
    args = ("same input", "/x/y.ext", 99, "go", Severity.WARNING, TIMESTAMP)
    assert format_entry(*args).encode("utf-8") == format_entry(*args).encode("utf-8")


def test_round_trip_by_splitting_delimiters():
    line = format_entry("disk almost full", "/var/app/store.ext", 512, "flush", Severity.WARNING, TIMESTAMP)
    timestamp, label, location, rest = line.rstrip("\n").split(" | ")
    function_name, message = rest.split(" - ")
    assert (timestamp, label, location, function_name, message) == (
        TIMESTAMP,
        "WARNING",
        "store.ext:512",
        "flush",
        "disk almost full",
    )


def test_parse_entry():
    line = format_entry("a - b | c", "/p/q.ext", 12, "run", Severity.VERBOSE, TIMESTAMP)
    entry = parse_entry(line)
    assert entry.timestamp == TIMESTAMP
    assert entry.severity is Severity.VERBOSE
    assert entry.source_file == "q.ext"
    assert entry.source_line == 12
    assert entry.location == "q.ext:12"
    assert entry.function_name == "run"
    assert entry.message == "a - b | c"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "just some text\n",
        "ts | INFO | file.ext:1 | fn without separator\n",
        "ts | INFO | file.ext | fn - msg\n",
        "ts | LOUD | file.ext:1 | fn - msg\n",
    ],
)
def test_parse_entry_rejects_malformed_lines(line):
    with pytest.raises(ValueError):
        parse_entry(line)
