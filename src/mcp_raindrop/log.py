"""Logging setup.

Everything goes to stderr: with the stdio transport, stdout carries the MCP
protocol stream and must never see a log line.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

ROOT_LOGGER_NAME = "mcp_raindrop"
LOG_FORMAT = "[%(asctime)s] %(levelname)-5s %(message)s"


def configure_logging(level: str = "info") -> None:
    """Send all records at ``level`` and above to stderr."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format=LOG_FORMAT,
        force=True,
    )


class ContextLogger(logging.LoggerAdapter):
    """Prefixes every message with ``[context]`` and writes to the shared logger."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['context']}] {msg}", kwargs


def get_logger(context: str | None = None) -> logging.Logger | ContextLogger:
    base = logging.getLogger(ROOT_LOGGER_NAME)
    if context is None:
        return base
    return ContextLogger(base, {"context": context})
