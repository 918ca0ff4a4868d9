"""Tests for the structlog-backed logging setup."""

from __future__ import annotations

import logging

import pytest
import structlog

from ds_common import logging as ds_logging

pytestmark = pytest.mark.unit_common


def test_resolve_level_variants() -> None:
    assert ds_logging._resolve_level(None, False) == logging.WARNING
    assert ds_logging._resolve_level(None, True) == logging.DEBUG
    assert ds_logging._resolve_level("10", False) == 10
    assert ds_logging._resolve_level("error", False) == logging.ERROR
    assert ds_logging._resolve_level("bogus", False) == logging.INFO
    assert ds_logging._resolve_level(logging.CRITICAL, False) == logging.CRITICAL


def test_configure_logging_force_installs_formatter(restore_logging, monkeypatch) -> None:
    monkeypatch.delenv("DS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DS_LOG_FILE", raising=False)
    monkeypatch.delenv("DS_LOG_JSON", raising=False)

    ds_logging.configure_logging(level="DEBUG", force=True)

    root = restore_logging
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_configure_logging_reads_env(restore_logging, monkeypatch, tmp_path) -> None:
    log_file = tmp_path / "select.log"
    monkeypatch.setenv("DS_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("DS_LOG_FILE", str(log_file))
    monkeypatch.setenv("DS_LOG_JSON", "1")

    ds_logging.configure_logging(force=True)

    root = restore_logging
    assert root.level == logging.ERROR
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logging.getLogger("ds_ui.test").error("selection failed")
    file_handlers[0].flush()
    content = log_file.read_text()
    assert '"event": "selection failed"' in content


def test_configure_logging_keeps_existing_handlers(restore_logging, monkeypatch) -> None:
    monkeypatch.delenv("DS_LOG_FILE", raising=False)
    root = restore_logging
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)

    ds_logging.configure_logging(level="INFO")

    assert sentinel in root.handlers
