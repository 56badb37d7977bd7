"""Tests for log redaction and log file rotation."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from core.log_setup import _MAX_LOG_FILES, RedactingFilter, _cleanup_old_logs


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args or None, None)


class TestRedactingFilter:
    def test_private_key_in_message(self) -> None:
        record = _record("loaded private_key=0x1234abcd for signer")
        assert RedactingFilter().filter(record)
        assert "0x1234abcd" not in record.getMessage()
        assert "[REDACTED]" in record.getMessage()

    def test_bearer_token_in_args(self) -> None:
        record = _record("auth header %s", "Bearer abc.def-123")
        RedactingFilter().filter(record)
        assert "abc.def-123" not in record.getMessage()

    def test_addresses_left_alone(self) -> None:
        text = "Resolved alice.stark -> 0x069a419c6ebab0a6aa74ca8e0bcfd9b3b17c985901dc00e9bad25cbd05e75343"
        record = _record(text)
        RedactingFilter().filter(record)
        assert record.getMessage() == text


class TestCleanupOldLogs:
    def test_keeps_newest(self, tmp_path: Path) -> None:
        now = time.time()
        for i in range(_MAX_LOG_FILES + 3):
            path = tmp_path / f"stargift_{i:02d}.log"
            path.write_text("x")
            os.utime(path, (now + i, now + i))
        (tmp_path / "other.log").write_text("keep")

        _cleanup_old_logs(tmp_path)

        remaining = sorted(p.name for p in tmp_path.glob("stargift_*.log"))
        assert len(remaining) == _MAX_LOG_FILES
        assert "stargift_00.log" not in remaining
        assert (tmp_path / "other.log").exists()
