"""Declarative tool registry.

Each tool is a :class:`ToolDescriptor`: a name, a description, pydantic models
for its arguments (and optionally its result), and an async handler called as
``handler(args, ctx)`` by the dispatcher. Adding a tool means appending a
descriptor to :data:`TOOLS`.
"""

from __future__ import annotations

import os
import platform
import re
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from mcp import types
from pydantic import BaseModel

from . import __version__
from .content import JSON_MIME, bookmark_link, collection_link, summary_with_links, text_content
from .errors import InvalidArgumentsError
from .models import (
    Bookmark,
    BookmarkManageArgs,
    BookmarkPage,
    BookmarkSearchArgs,
    BulkEditRaindropsArgs,
    Collection,
    CollectionListArgs,
    CollectionManageArgs,
    ContentResult,
    DiagnosticsArgs,
    GetRaindropArgs,
    Highlight,
    HighlightManageArgs,
    ListRaindropsArgs,
    TagManageArgs,
    TagOperationResult,
)
from .resources import parse_identifier

if TYPE_CHECKING:
    from .dispatcher import ToolContext

Handler = Callable[[Any, "ToolContext"], Awaitable[Any]]

_STARTED_MONOTONIC = time.monotonic()
_STARTED_AT = datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: type[BaseModel]
    handler: Handler
    output_schema: type[BaseModel] | None = None

    @property
    def title(self) -> str:
        return re.sub(r"\b\w", lambda m: m.group().upper(), self.name.replace("_", " "))

    def describe_input(self) -> dict[str, Any]:
        return self.input_schema.model_json_schema()

    def describe_output(self) -> dict[str, Any]:
        if self.output_schema is None:
            return {}
        return self.output_schema.model_json_schema()


def _require(value: Any, field: str, operation: str) -> None:
    # Zero ids and empty strings count as absent.
    if value is None or value == "" or value == 0:
        raise InvalidArgumentsError(f"{field} is required for {operation}")


def _defined(**fields: Any) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


async def _diagnostics(args: DiagnosticsArgs, ctx: ToolContext) -> types.CallToolResult:
    meta: dict[str, Any] = {
        "version": __version__,
        "mcpProtocolVersion": types.LATEST_PROTOCOL_VERSION,
        "pythonVersion": platform.python_version(),
        "os": sys.platform,
        "uptime": round(time.monotonic() - _STARTED_MONOTONIC, 3),
        "startTime": _STARTED_AT.isoformat(),
        "enabledTools": [tool.name for tool in TOOLS],
        "apiStatus": "unknown",
    }
    if args.include_environment:
        meta["env"] = {
            "MCP_TRANSPORT": os.environ.get("MCP_TRANSPORT"),
            "LOG_LEVEL": os.environ.get("LOG_LEVEL"),
            "RAINDROP_ACCESS_TOKEN": "set" if os.environ.get("RAINDROP_ACCESS_TOKEN") else "unset",
        }
    link = types.ResourceLink(
        type="resource_link",
        uri="diagnostics://server",
        name="Server Diagnostics",
        description=f"Server diagnostics and environment info resource. Version: {__version__}",
        mimeType=JSON_MIME,
        _meta=meta,
    )
    return types.CallToolResult(content=[link])


async def _collection_list(_: CollectionListArgs, ctx: ToolContext) -> types.CallToolResult:
    collections = await ctx.raindrop.list_collections()
    return types.CallToolResult(
        content=summary_with_links(
            f"Found {len(collections)} collections",
            [collection_link(c) for c in collections],
        )
    )


async def _collection_manage(args: CollectionManageArgs, ctx: ToolContext) -> dict[str, Any]:
    if args.operation == "create":
        _require(args.title, "title", "create")
        return await ctx.raindrop.create_collection(args.title, parent_id=args.parent_id)
    if args.operation == "update":
        _require(args.id, "id", "update")
        updates = _defined(title=args.title, color=args.color, description=args.description)
        return await ctx.raindrop.update_collection(args.id, updates)
    if args.operation == "delete":
        _require(args.id, "id", "delete")
        await ctx.raindrop.delete_collection(args.id)
        return {"deleted": True}
    raise InvalidArgumentsError(f"Unsupported operation: {args.operation}")


async def _bookmark_search(args: BookmarkSearchArgs, ctx: ToolContext) -> types.CallToolResult:
    result = await ctx.raindrop.get_bookmarks(
        search=args.search,
        collection=args.collection,
        tags=args.tags,
        tag=args.tag,
        important=args.important,
        page=args.page,
        per_page=args.per_page,
        sort=args.sort,
        duplicates=args.duplicates,
        broken=args.broken,
        highlight=args.highlight,
        domain=args.domain,
    )
    return types.CallToolResult(
        content=summary_with_links(
            f"Found {result['count']} bookmarks",
            [bookmark_link(b) for b in result["items"]],
        )
    )


async def _bookmark_manage(args: BookmarkManageArgs, ctx: ToolContext) -> dict[str, Any]:
    payload = _defined(
        link=args.url,
        title=args.title,
        excerpt=args.description,
        tags=args.tags,
        important=args.important,
    )
    if args.operation == "create":
        _require(args.collection_id, "collectionId", "create")
        return await ctx.raindrop.create_bookmark(args.collection_id, payload)
    if args.operation == "update":
        _require(args.id, "id", "update")
        return await ctx.raindrop.update_bookmark(args.id, payload)
    if args.operation == "delete":
        _require(args.id, "id", "delete")
        await ctx.raindrop.delete_bookmark(args.id)
        return {"deleted": True}
    raise InvalidArgumentsError(f"Unsupported operation: {args.operation}")


async def _tag_manage(args: TagManageArgs, ctx: ToolContext) -> dict[str, Any]:
    if args.operation == "rename":
        _require(args.tag_names, "tagNames", "rename")
        _require(args.new_name, "newName", "rename")
        if not args.tag_names:
            raise InvalidArgumentsError("tagNames must include at least one value for rename")
        ok = await ctx.raindrop.rename_tag(args.collection_id, args.tag_names[0], args.new_name)
        return {"tagNames": args.tag_names[:1], "newName": args.new_name, "success": ok}
    if args.operation == "merge":
        _require(args.tag_names, "tagNames", "merge")
        _require(args.new_name, "newName", "merge")
        ok = await ctx.raindrop.merge_tags(args.collection_id, args.tag_names, args.new_name)
        return {"tagNames": args.tag_names, "newName": args.new_name, "success": ok}
    if args.operation == "delete":
        _require(args.tag_names, "tagNames", "delete")
        ok = await ctx.raindrop.delete_tags(args.collection_id, args.tag_names)
        return {"tagNames": args.tag_names, "deleted": ok}
    raise InvalidArgumentsError(f"Unsupported operation: {args.operation}")


async def _highlight_manage(args: HighlightManageArgs, ctx: ToolContext) -> dict[str, Any]:
    if args.operation == "create":
        _require(args.bookmark_id, "bookmarkId", "create")
        _require(args.text, "text", "create")
        return await ctx.raindrop.create_highlight(
            args.bookmark_id, _defined(text=args.text, note=args.note, color=args.color)
        )
    if args.operation == "update":
        _require(args.id, "id", "update")
        return await ctx.raindrop.update_highlight(
            args.id, _defined(text=args.text, note=args.note, color=args.color)
        )
    if args.operation == "delete":
        _require(args.id, "id", "delete")
        await ctx.raindrop.delete_highlight(args.id)
        return {"deleted": True}
    raise InvalidArgumentsError(f"Unsupported operation: {args.operation}")


async def _get_raindrop(args: GetRaindropArgs, ctx: ToolContext) -> types.CallToolResult:
    bookmark = await ctx.raindrop.get_bookmark(parse_identifier(args.id, "bookmark"))
    return types.CallToolResult(content=[bookmark_link(bookmark)])


async def _list_raindrops(args: ListRaindropsArgs, ctx: ToolContext) -> types.CallToolResult:
    result = await ctx.raindrop.get_bookmarks(
        collection=parse_identifier(args.collection_id, "collection"),
        per_page=args.limit or 50,
    )
    return types.CallToolResult(
        content=summary_with_links(
            f"Found {result['count']} bookmarks in collection",
            [bookmark_link(b) for b in result["items"]],
        )
    )


def _bulk_edit_error(message: str) -> types.CallToolResult:
    return types.CallToolResult(content=[text_content(f"Bulk edit error: {message}")], isError=True)


async def _bulk_edit_raindrops(args: BulkEditRaindropsArgs, ctx: ToolContext) -> types.CallToolResult:
    """Bulk edit reports Raindrop failures as an ``isError`` result instead of raising."""
    # Only defined fields are sent; an empty ``tags`` list still clears tags.
    body = args.model_dump(by_alias=True, exclude_none=True, exclude={"collection_id"})
    try:
        result = await ctx.raindrop.bulk_update_raindrops(args.collection_id, body)
    except Exception as exc:
        ctx.logger.warning("Bulk edit of collection %s failed: %s", args.collection_id, exc)
        return _bulk_edit_error(str(exc) or type(exc).__name__)
    if not result.get("result"):
        return _bulk_edit_error(result.get("errorMessage") or "Bulk edit failed")
    modified = result.get("modified")
    return types.CallToolResult(
        content=[
            text_content(
                f"Bulk edit successful. Modified: {modified if modified is not None else 'unknown'}"
            )
        ]
    )


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="diagnostics",
        description=(
            "Provides server diagnostics and environment info. "
            "Use includeEnvironment param for detailed info."
        ),
        input_schema=DiagnosticsArgs,
        output_schema=ContentResult,
        handler=_diagnostics,
    ),
    ToolDescriptor(
        name="collection_list",
        description="Lists all Raindrop collections for the authenticated user.",
        input_schema=CollectionListArgs,
        output_schema=ContentResult,
        handler=_collection_list,
    ),
    ToolDescriptor(
        name="collection_manage",
        description=(
            "Creates, updates, or deletes a collection. "
            "Use the operation parameter to specify the action."
        ),
        input_schema=CollectionManageArgs,
        output_schema=Collection,
        handler=_collection_manage,
    ),
    ToolDescriptor(
        name="bookmark_search",
        description="Searches bookmarks with advanced filters, tags, and full-text search.",
        input_schema=BookmarkSearchArgs,
        output_schema=BookmarkPage,
        handler=_bookmark_search,
    ),
    ToolDescriptor(
        name="bookmark_manage",
        description=(
            "Creates, updates, or deletes bookmarks. "
            "Use the operation parameter to specify the action."
        ),
        input_schema=BookmarkManageArgs,
        output_schema=Bookmark,
        handler=_bookmark_manage,
    ),
    ToolDescriptor(
        name="tag_manage",
        description=(
            "Renames, merges, or deletes tags. Use the operation parameter to specify the action."
        ),
        input_schema=TagManageArgs,
        output_schema=TagOperationResult,
        handler=_tag_manage,
    ),
    ToolDescriptor(
        name="highlight_manage",
        description=(
            "Creates, updates, or deletes highlights. "
            "Use the operation parameter to specify the action."
        ),
        input_schema=HighlightManageArgs,
        output_schema=Highlight,
        handler=_highlight_manage,
    ),
    ToolDescriptor(
        name="getRaindrop",
        description="Fetch a single Raindrop.io bookmark by ID.",
        input_schema=GetRaindropArgs,
        output_schema=ContentResult,
        handler=_get_raindrop,
    ),
    ToolDescriptor(
        name="listRaindrops",
        description="List Raindrop.io bookmarks for a collection.",
        input_schema=ListRaindropsArgs,
        output_schema=BookmarkPage,
        handler=_list_raindrops,
    ),
    ToolDescriptor(
        name="bulk_edit_raindrops",
        description=(
            "Bulk update tags, favorite status, media, cover, "
            "or move bookmarks to another collection."
        ),
        input_schema=BulkEditRaindropsArgs,
        output_schema=ContentResult,
        handler=_bulk_edit_raindrops,
    ),
)
