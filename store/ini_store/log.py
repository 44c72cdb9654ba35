"""
Centralized logging setup for ini_store
---------------------------------------
Console output plus an optional rotating log file, with structured (JSON)
records on request.

The store itself never configures handlers; it only asks for a named logger.
Applications (and the `ini-store` command) call `setup_logger` once.
"""

import sys
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import threading
_init_lock = threading.Lock()

LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 2


def setup_logger(
    name: str = "ini_store",
    log_file: Optional[str] = None,
    level: str = "INFO",
    json_format: bool = False,
) -> logging.Logger:
    """
    Initialize a logger with console and, optionally, rotating file output.

    Args:
        name: Logger name (default: "ini_store")
        log_file: Path to logfile, None for console only
        level: Log level string (DEBUG, INFO, WARNING, ERROR)
        json_format: Whether to output logs in JSON format (default: False)

    The file rotates at LOG_MAX_BYTES, keeping LOG_BACKUP_COUNT old files.
    """
    with _init_lock:
        logger = logging.getLogger(name)
        if getattr(logger, "_ini_store_logger_initialized", False):
            return logger
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        logger.propagate = False  # prevent duplicate output

        # --- Formatter setup ---
        if json_format:
            formatter = JsonLogFormatter()
        else:
            formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

        # --- Console Handler ---
        # stdout is reserved for command output
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        # --- File Handler ---
        if log_file:
            try:
                log_path = Path(log_file).expanduser()
                log_path.parent.mkdir(parents=True, exist_ok=True)
                fh = RotatingFileHandler(str(log_path), maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
                fh.setFormatter(formatter)
                logger.addHandler(fh)
            except OSError:
                logger.warning("Could not open log file '%s', continuing with console logging only.", log_file)

        logger._ini_store_logger_initialized = True
        logger.debug("Logger '%s' initialized (level=%s, file=%s)", name, level, log_file)
    return logger


class JsonLogFormatter(logging.Formatter):
    """
    Outputs log records as structured JSON, one object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def get_logger(name: str = "ini_store") -> logging.Logger:
    """Retrieve a logger below the ini_store hierarchy (configured or not)."""
    return logging.getLogger(name)
