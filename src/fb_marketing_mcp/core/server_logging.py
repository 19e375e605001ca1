# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Process logger for the MCP server.

stdout carries the stdio MCP transport, so all records go to a per-user log file.
"""

import logging
import os
import pathlib
import platform

PACKAGE_NAME = "fb-marketing-mcp"
LOGGER_NAME = "fb_marketing_mcp"
LOG_LEVEL_ENV = "FB_MARKETING_MCP_LOG_LEVEL"


def _resolve_log_file() -> pathlib.Path:
    """Return a writable per-user log file path across OSes."""
    system_name = platform.system().lower()
    if system_name == "windows":
        root = pathlib.Path(os.environ.get("APPDATA", pathlib.Path.home()))
    elif system_name == "darwin":
        root = pathlib.Path.home() / "Library" / "Application Support"
    else:
        root = pathlib.Path.home() / ".config"

    log_dir = root / PACKAGE_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "server.log"


def _resolve_level() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def _create_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level())
    handler = logging.FileHandler(_resolve_log_file(), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("logger_initialized level=%s", logging.getLevelName(logger.level))
    return logger


logger = _create_logger()
