# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Logging configuration for the application."""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from fedisearch.config import Settings

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def json_formatter() -> jsonlogger.JsonFormatter:
    """One JSON object per record with ``timestamp``, ``level`` and ``logger`` keys."""
    return jsonlogger.JsonFormatter(
        _JSON_FORMAT,
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )


def setup_logging(settings: Settings) -> None:
    """Configure application-wide logging.

    Level comes from ``settings.log_level``; output goes to stdout.
    """
    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    logging.basicConfig(
        level=settings.log_level.upper(),
        handlers=[handler],
        force=True,
    )
