"""Domain errors."""

from __future__ import annotations

from dataclasses import dataclass


class RaindropMcpError(Exception):
    """Base class for errors raised by the protocol layer."""


class InvalidArgumentsError(RaindropMcpError, ValueError):
    """Arguments (or a resource URI segment) do not fit the requested operation."""


class NotFoundError(RaindropMcpError, LookupError):
    """Unknown tool id or resource URI."""


class ToolExecutionError(RaindropMcpError):
    """A tool handler failed while talking to Raindrop.io (or failed unexpectedly)."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(f"Tool '{tool}' failed: {message}")
        self.tool = tool
        self.message = message


class ResourceFetchError(RaindropMcpError):
    """A dynamic resource URI was recognized but its backend fetch failed."""

    def __init__(self, uri: str, message: str) -> None:
        super().__init__(f"Failed to fetch data for resource {uri}: {message}")
        self.uri = uri
        self.message = message


@dataclass(frozen=True, slots=True)
class RaindropApiError(RuntimeError):
    """Raised when the Raindrop.io REST API returns a non-success response."""

    status_code: int
    method: str
    url: str
    response_text: str

    def __str__(self) -> str:
        hint = ""
        if self.status_code == 401:
            hint = " (check your RAINDROP_ACCESS_TOKEN)"
        elif self.status_code == 429:
            hint = " (rate limited, wait before making more requests)"
        return (
            f"Raindrop API error {self.status_code}{hint} for {self.method} {self.url}: "
            f"{self.response_text}"
        )
