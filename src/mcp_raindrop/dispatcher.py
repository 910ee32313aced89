"""Runs tool handlers with the Raindrop collaborator bound in."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pydantic
from mcp import types

from .content import json_text, text_content
from .errors import InvalidArgumentsError, RaindropMcpError, ToolExecutionError
from .log import ContextLogger, get_logger
from .raindrop_client import RaindropClient
from .tools import ToolDescriptor


@dataclass(slots=True)
class ToolContext:
    """What every handler receives next to its parsed arguments."""

    raindrop: RaindropClient
    logger: logging.Logger | ContextLogger
    extra: dict[str, Any] = field(default_factory=dict)


class Dispatcher:
    """Invokes handlers and normalizes their failures.

    Errors from :mod:`mcp_raindrop.errors` propagate unchanged; anything else a
    handler raises is re-raised as :class:`ToolExecutionError` chained to the
    original. Nothing is retried and nothing is suppressed.
    """

    def __init__(
        self,
        raindrop: RaindropClient,
        *,
        logger: logging.Logger | ContextLogger | None = None,
    ) -> None:
        self._raindrop = raindrop
        self._logger = logger or get_logger("dispatcher")

    async def dispatch(
        self,
        descriptor: ToolDescriptor,
        arguments: dict[str, Any],
        extra: dict[str, Any] | None = None,
    ) -> Any:
        try:
            args = descriptor.input_schema.model_validate(arguments)
        except pydantic.ValidationError as exc:
            raise InvalidArgumentsError(f"Invalid arguments for {descriptor.name}: {exc}") from exc

        ctx = ToolContext(
            raindrop=self._raindrop,
            logger=get_logger(f"tool:{descriptor.name}"),
            extra=dict(extra or {}),
        )
        self._logger.debug("Calling tool %s", descriptor.name)
        try:
            return await descriptor.handler(args, ctx)
        except RaindropMcpError:
            raise
        except Exception as exc:
            self._logger.error("Tool %s failed: %s", descriptor.name, exc)
            raise ToolExecutionError(descriptor.name, str(exc) or type(exc).__name__) from exc


def to_call_tool_result(result: Any) -> types.CallToolResult:
    """Shape a handler result for the wire.

    Handlers return either a ``CallToolResult``, a list of content items, or a
    plain entity dict (which becomes JSON text plus ``structuredContent``).
    """
    if isinstance(result, types.CallToolResult):
        return result
    if isinstance(result, dict):
        return types.CallToolResult(content=[text_content(json_text(result))], structuredContent=result)
    if isinstance(result, list):
        return types.CallToolResult(content=result)
    return types.CallToolResult(content=[text_content(json_text(result))])
