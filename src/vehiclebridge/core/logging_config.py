"""
vehiclebridge.core.logging_config - Structured Logging Setup
==============================================================

Every module logs through a module-level ``structlog.get_logger()`` and binds
its own context (``component=...``, ``impl=...``). This module wires those
loggers to an output format once, at process start.

Usage:
    >>> configure_logging(BridgeConfig(log_level="DEBUG", log_format="json"))
"""

from __future__ import annotations

import logging

import structlog

from vehiclebridge.core.config import BridgeConfig
from vehiclebridge.core.enums import LogFormat


def configure_logging(config: BridgeConfig) -> None:
    """Configure structlog from the bridge configuration.

    Levels below ``config.log_level`` are dropped by a filtering bound
    logger. Unknown level names fall back to INFO.
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.log_format == LogFormat.JSON:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
