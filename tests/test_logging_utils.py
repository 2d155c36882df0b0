"""Tests for configure_logging."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from stalwart_preinst.logging_utils import configure_logging


def test_writes_to_requested_file(tmp_path: Path, reset_root_logger) -> None:
    log_path = tmp_path / "log" / "preinst.log"

    actual = configure_logging(log_path=str(log_path))
    logging.getLogger("stalwart_preinst.test").info("hello from test")
    for h in reset_root_logger.handlers:
        h.flush()

    assert actual == str(log_path)
    assert "hello from test" in log_path.read_text(encoding="utf-8")


def test_second_call_does_not_add_handlers(tmp_path: Path, reset_root_logger) -> None:
    configure_logging(log_path=str(tmp_path / "a.log"))
    count = len(reset_root_logger.handlers)

    actual = configure_logging(log_path=str(tmp_path / "b.log"))

    assert actual == str(tmp_path / "a.log")
    assert len(reset_root_logger.handlers) == count


def test_console_is_off_by_default(tmp_path: Path, reset_root_logger) -> None:
    before = [h for h in reset_root_logger.handlers if type(h) is logging.StreamHandler]
    configure_logging(log_path=str(tmp_path / "c.log"))
    after = [h for h in reset_root_logger.handlers if type(h) is logging.StreamHandler]

    assert after == before


def test_unwritable_path_falls_back(tmp_path: Path, reset_root_logger) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    actual = configure_logging(log_path=str(blocker / "preinst.log"))

    assert actual != str(blocker / "preinst.log")
    assert actual.endswith("preinst.log")


def test_unusable_fallback_raises(tmp_path: Path, reset_root_logger, monkeypatch) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(blocker))

    with pytest.raises(OSError):
        configure_logging(log_path=str(blocker / "preinst.log"))
