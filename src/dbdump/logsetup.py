#!/usr/bin/env python3
from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from typing import Sequence


_PASSWORD_RE = re.compile(r'^(--password=).*$')


def setup_logging() -> logging.Logger:
    """Configure file logging for the 'dbdump' logger.

    Environment variables:
    - DBDUMP_LOG_DIR (default: ./logs)
    - DBDUMP_LOG_LEVEL (default: INFO)
    - DBDUMP_LOG_MAX_BYTES (default: 10485760 i.e., 10MB)
    - DBDUMP_LOG_BACKUPS (default: 5)
    """
    log_dir = os.environ.get("DBDUMP_LOG_DIR", os.path.join(os.getcwd(), "logs"))
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "dbdump.log")

    level_name = os.environ.get("DBDUMP_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    max_bytes = int(os.environ.get("DBDUMP_LOG_MAX_BYTES", 10 * 1024 * 1024))
    backups = int(os.environ.get("DBDUMP_LOG_BACKUPS", 5))

    # stdout carries the process output and the YAML envelope
    logging.basicConfig(level=logging.WARNING)
    logger = logging.getLogger("dbdump")
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate handlers if called twice
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backups)
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(process)d] %(name)s %(module)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.debug("Logging initialized: %s level=%s", log_file, level_name)

    # Connection-level events from the MySQL driver go to the same file
    drv_logger = logging.getLogger("mysql.connector")
    drv_logger.setLevel(max(level, logging.INFO))
    drv_logger.propagate = False
    for h in logger.handlers:
        if h not in drv_logger.handlers:
            drv_logger.addHandler(h)
    return logger


def mask_args(cmd: Sequence[str]) -> str:
    """Command line for logs with the password value hidden."""
    return ' '.join(_PASSWORD_RE.sub(r'\1***', arg) for arg in cmd)
