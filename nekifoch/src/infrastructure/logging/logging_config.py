"""
Logging Configuration for Nekifoch.

Console output for people, daily-rotated JSON files for diagnostics.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from ...utils.config_paths import get_logs_dir

LOG_FILE = "nekifoch.log"
ERROR_LOG_FILE = "nekifoch-errors.log"

# Attributes every LogRecord carries; anything else came in via `extra`
_RECORD_ATTRIBUTES = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message',
))


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def cleanup_old_logs(log_dir: Path, retention_days: int) -> int:
    """
    Remove rotated log files older than the retention period.

    Args:
        log_dir: Directory containing log files
        retention_days: Number of days to retain log files

    Returns:
        Number of files removed
    """
    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    for pattern in (f"{LOG_FILE}.*", f"{ERROR_LOG_FILE}.*"):
        for log_file in log_dir.glob(pattern):
            try:
                file_mtime = datetime.fromtimestamp(log_file.stat().st_mtime)
                if file_mtime < cutoff_date:
                    log_file.unlink()
                    cleaned_count += 1
            except OSError as e:
                logging.getLogger("nekifoch.logging").warning(f"Failed to clean up log file {log_file}: {e}")

    return cleaned_count


def _json_file_handler(path: Path, level: int, retention_days: int) -> logging.Handler:
    """Daily-rotated JSON lines file, keeping `retention_days` backups."""
    handler = logging.handlers.TimedRotatingFileHandler(
        str(path), when="midnight", backupCount=retention_days, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(debug: bool = False, log_dir: Optional[str] = None, retention_days: int = 10,
                  console_level: Optional[int] = None) -> Path:
    """
    Setup logging with daily rotation.

    Args:
        debug: Enable debug level logging
        log_dir: Directory for log files (defaults to user data dir)
        retention_days: Number of days to retain log files
        console_level: Console threshold; defaults to DEBUG or WARNING

    Returns:
        The log directory in use
    """
    if log_dir:
        log_dir_path = Path(log_dir)
        log_dir_path.mkdir(parents=True, exist_ok=True)
    else:
        log_dir_path = get_logs_dir()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.handlers.clear()

    # Console stays quiet unless debugging; CLI output is the user-facing channel
    if console_level is None:
        console_level = logging.DEBUG if debug else logging.WARNING
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(console_handler)

    root_logger.addHandler(_json_file_handler(log_dir_path / LOG_FILE, logging.DEBUG, retention_days))
    root_logger.addHandler(_json_file_handler(log_dir_path / ERROR_LOG_FILE, logging.ERROR, retention_days))

    cleanup_old_logs(log_dir_path, retention_days)

    logging.getLogger("nekifoch").setLevel(logging.DEBUG if debug else logging.INFO)
    logging.getLogger("PyQt6").setLevel(logging.WARNING)

    logger = logging.getLogger("nekifoch.logging")
    logger.debug(f"Logging initialized - Debug: {debug}, Log dir: {log_dir_path}")
    return log_dir_path
