from __future__ import annotations

import logging
import pickle
from pathlib import Path

import gin
import pytest
import structlog

from filelog.logging.file_logger import open_writer
from filelog.utils import (
    DEFAULT_DATE_FORMAT,
    FileOpenError,
    Severity,
    TextEncoding,
    WriteError,
    WriterClosedError,
    WriterConfig,
    load_config,
    load_encoding,
    setup_structlog,
)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


@pytest.fixture
def clean_gin():
    gin.clear_config()
    yield
    gin.clear_config()


def test_severity_from_label():
    assert Severity.from_label("WARNING") is Severity.WARNING
    assert str(Severity.VERBOSE) == "VERBOSE"
    with pytest.raises(ValueError):
        Severity.from_label("warning")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("utf-8", TextEncoding.UTF8),
        ("UTF8", TextEncoding.UTF8),
        ("utf_16_le", TextEncoding.UTF16_LE),
        ("US-ASCII", TextEncoding.ASCII),
        ("ISO-8859-1", TextEncoding.LATIN1),
        (TextEncoding.CP1252, TextEncoding.CP1252),
    ],
)
def test_load_encoding(name, expected):
    assert load_encoding(name) is expected


def test_load_encoding_rejects_unknown():
    with pytest.raises(ValueError):
        load_encoding("ebcdic")


def test_errors_carry_path_and_pickle():
    error = FileOpenError("/var/log/app.log", "Permission denied")
    assert str(error) == "/var/log/app.log: Permission denied"
    restored = pickle.loads(pickle.dumps(error))
    assert isinstance(restored, FileOpenError)
    assert restored.path == error.path
    assert restored.error_msg == error.error_msg
    assert issubclass(WriterClosedError, WriteError)


def test_writer_config_defaults(clean_gin):
    config = WriterConfig()
    assert config.to_dict() == {"encoding": "utf-8", "date_format": DEFAULT_DATE_FORMAT}


def test_gin_bindings_reach_open_writer(tmp_path, clean_gin):
    gin.parse_config(
        [
            'WriterConfig.encoding = "latin-1"',
            'WriterConfig.date_format = "yyyy-MM-dd"',
        ]
    )
    with open_writer(tmp_path / "app.log") as writer:
        assert writer.encoding is TextEncoding.LATIN1
        assert writer.date_format == "yyyy-MM-dd"
        writer.record("café", "a.ext", 1, "f", Severity.INFO)
    assert (tmp_path / "app.log").read_bytes().endswith(b"caf\xe9\n")


def test_open_writer_explicit_config(tmp_path, clean_gin):
    config = WriterConfig(encoding="utf-16-be", date_format="HH:mm")
    with open_writer(tmp_path / "app.log", config=config) as writer:
        assert writer.encoding is TextEncoding.UTF16_BE


def test_load_default_config_file(tmp_path, clean_gin):
    load_config(CONFIG_DIR / "default.gin")
    with open_writer(tmp_path / "app.log") as writer:
        assert writer.encoding is TextEncoding.UTF8
        assert writer.date_format == DEFAULT_DATE_FORMAT


def test_open_writer_reports_open_failure(tmp_path, clean_gin):
    with pytest.raises(FileOpenError):
        open_writer(tmp_path / "missing" / "app.log")


def test_setup_structlog():
    try:
        setup_structlog(level=logging.DEBUG)
        assert structlog.is_configured()
        structlog.get_logger("filelog").info("diagnostics_ready", answer=42)
    finally:
        structlog.reset_defaults()
