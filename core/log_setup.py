"""Centralized logging setup — file + optional console output.

Each CLI run creates a new timestamped log file in ``logs/`` (e.g.
``logs/stargift_2026-01-01_00-00-00.log``). A ``latest.log`` symlink
always points to the current run's log. Old logs beyond
``_MAX_LOG_FILES`` are automatically cleaned up.

Includes a RedactingFilter that strips private keys, API keys and bearer
tokens from log messages before they reach disk. Token and recipient
addresses are public and are left alone.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path

_LOG_DIR = Path("logs")
_MAX_LOG_FILES = 10
_FMT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

_configured = False

_REDACT_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(private[_-]?key|api[_-]?key|secret|password|mnemonic)\s*[:=]\s*\S+", re.I),
    re.compile(r"(Bearer\s+[a-zA-Z0-9._\-]+)", re.I),
]

_REDACTED = "[REDACTED]"


class RedactingFilter(logging.Filter):
    """Strip sensitive patterns from log records before output."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _redact(record.msg)
        if record.args:
            args = record.args if isinstance(record.args, tuple) else (record.args,)
            redacted = tuple(_redact(a) if isinstance(a, str) else a for a in args)
            record.args = redacted if isinstance(record.args, tuple) else redacted[0]  # type: ignore[assignment]
        return True


def _redact(text: str) -> str:
    for pattern in _REDACT_PATTERNS:
        text = pattern.sub(_REDACTED, text)
    return text


def _cleanup_old_logs(log_dir: Path) -> None:
    """Remove oldest log files when count exceeds _MAX_LOG_FILES."""
    log_files = sorted(
        (f for f in log_dir.iterdir() if f.name.startswith("stargift_") and f.suffix == ".log"),
        key=lambda f: f.stat().st_mtime,
    )
    while len(log_files) > _MAX_LOG_FILES:
        oldest = log_files.pop(0)
        oldest.unlink(missing_ok=True)


def setup_logging(*, debug: bool = False, log_dir: Path | None = None) -> None:
    """Configure root logger with a timestamped file handler and console.

    Safe to call multiple times — subsequent calls are no-ops.
    """
    global _configured
    if _configured:
        return
    _configured = True

    log_dir = log_dir or _LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = log_dir / f"stargift_{timestamp}.log"

    latest_link = log_dir / "latest.log"
    try:
        if latest_link.is_symlink() or latest_link.exists():
            latest_link.unlink()
        os.symlink(log_file.name, latest_link)
    except OSError:
        pass  # Symlinks may not work on all platforms

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    redact_filter = RedactingFilter()
    fmt = logging.Formatter(_FMT, datefmt=_DATE_FMT)

    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    fh.addFilter(redact_filter)
    root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if debug else logging.WARNING)
    ch.setFormatter(fmt)
    ch.addFilter(redact_filter)
    root.addHandler(ch)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _cleanup_old_logs(log_dir)
