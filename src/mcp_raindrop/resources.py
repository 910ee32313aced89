"""URI-addressed resources: live Raindrop entities and a static table."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from mcp import types

from .content import JSON_MIME, json_text
from .errors import InvalidArgumentsError, NotFoundError, ResourceFetchError
from .log import ContextLogger, get_logger
from .models import ResourceInfo
from .raindrop_client import RaindropClient

Fetcher = Callable[[RaindropClient, int | None], Awaitable[Any]]


def parse_identifier(segment: str, label: str) -> int:
    """Parse a positive integer id; ``label`` names the id in error messages."""
    if not segment:
        raise InvalidArgumentsError(f"{label.capitalize()} ID is required")
    if not (segment.isascii() and segment.isdecimal()) or int(segment) <= 0:
        raise InvalidArgumentsError(f"Invalid {label} ID: {segment}")
    return int(segment)


@dataclass(frozen=True, slots=True)
class DynamicResourcePattern:
    """A URI rule resolved against Raindrop on every read."""

    prefix: str
    label: str
    payload_key: str
    fetch: Fetcher
    exact: bool = False
    uri_template: str | None = None
    title: str = ""
    description: str = ""

    def matches(self, uri: str) -> bool:
        return uri == self.prefix if self.exact else uri.startswith(self.prefix)

    def identifier(self, uri: str) -> int | None:
        if self.exact:
            return None
        return parse_identifier(uri[len(self.prefix) :], self.label)


@dataclass(frozen=True, slots=True)
class StaticResource:
    uri: str
    title: str
    description: str
    contents: tuple[types.TextResourceContents, ...]
    mime_type: str = JSON_MIME

    @classmethod
    def build(
        cls,
        uri: str,
        contents: types.TextResourceContents | Iterable[types.TextResourceContents],
        *,
        title: str | None = None,
        description: str | None = None,
    ) -> StaticResource:
        if isinstance(contents, types.TextResourceContents):
            contents = (contents,)
        return cls(
            uri=uri,
            title=title or f"Resource {uri}",
            description=description or f"MCP resource for {uri}",
            contents=tuple(contents),
        )

    @classmethod
    def from_payload(cls, uri: str, payload: Any, **kwargs: Any) -> StaticResource:
        return cls.build(uri, json_contents(uri, payload), **kwargs)


def json_contents(uri: str, payload: Any) -> types.TextResourceContents:
    return types.TextResourceContents(uri=uri, mimeType=JSON_MIME, text=json_text(payload))


async def _fetch_collection(raindrop: RaindropClient, collection_id: int | None) -> Any:
    return await raindrop.get_collection(collection_id)


async def _fetch_bookmark(raindrop: RaindropClient, bookmark_id: int | None) -> Any:
    return await raindrop.get_bookmark(bookmark_id)


async def _fetch_profile(raindrop: RaindropClient, _: int | None) -> Any:
    return await raindrop.get_user_info()


DYNAMIC_PATTERNS: tuple[DynamicResourcePattern, ...] = (
    DynamicResourcePattern(
        prefix="mcp://collection/",
        label="collection",
        payload_key="collection",
        fetch=_fetch_collection,
        uri_template="mcp://collection/{id}",
        title="Collection Resource Pattern",
        description="Access any Raindrop collection by ID (e.g., mcp://collection/123456)",
    ),
    DynamicResourcePattern(
        prefix="mcp://raindrop/",
        label="raindrop",
        payload_key="raindrop",
        fetch=_fetch_bookmark,
        uri_template="mcp://raindrop/{id}",
        title="Raindrop Resource Pattern",
        description="Access any Raindrop bookmark by ID (e.g., mcp://raindrop/987654)",
    ),
    # Listed as a static resource; this rule makes reads always live.
    DynamicResourcePattern(
        prefix="mcp://user/profile",
        label="profile",
        payload_key="profile",
        fetch=_fetch_profile,
        exact=True,
    ),
)


class ResourceResolver:
    """Resolves a URI: dynamic patterns first (first match wins), then the static table."""

    def __init__(
        self,
        raindrop: RaindropClient,
        static_resources: Mapping[str, StaticResource],
        *,
        patterns: tuple[DynamicResourcePattern, ...] = DYNAMIC_PATTERNS,
        logger: logging.Logger | ContextLogger | None = None,
    ) -> None:
        self._raindrop = raindrop
        self._static = dict(static_resources)
        self._patterns = patterns
        self._logger = logger or get_logger("resources")

    @property
    def static_resources(self) -> list[StaticResource]:
        return list(self._static.values())

    @property
    def templates(self) -> list[DynamicResourcePattern]:
        return [p for p in self._patterns if p.uri_template]

    def list_resources(self) -> list[ResourceInfo]:
        listed = [
            ResourceInfo(
                id=r.uri, uri=r.uri, title=r.title, description=r.description, mime_type=r.mime_type
            )
            for r in self._static.values()
        ]
        listed.extend(
            ResourceInfo(
                id=p.uri_template, uri=p.uri_template, title=p.title, description=p.description
            )
            for p in self.templates
        )
        return listed

    async def read(self, uri: str) -> types.ReadResourceResult:
        for pattern in self._patterns:
            if not pattern.matches(uri):
                continue
            # Malformed ids fail here, before any network call.
            identifier = pattern.identifier(uri)
            try:
                entity = await pattern.fetch(self._raindrop, identifier)
            except Exception as exc:
                self._logger.warning("Fetching %s failed: %s", uri, exc)
                raise ResourceFetchError(uri, str(exc) or type(exc).__name__) from exc
            return types.ReadResourceResult(
                contents=[json_contents(uri, {pattern.payload_key: entity})]
            )

        resource = self._static.get(uri)
        if resource is None:
            raise NotFoundError(f'Resource with uri "{uri}" not found or not readable.')
        return types.ReadResourceResult(contents=list(resource.contents))
