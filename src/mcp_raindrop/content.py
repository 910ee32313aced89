"""Content items returned by tools and resources."""

from __future__ import annotations

import json
from typing import Any

from mcp import types

JSON_MIME = "application/json"

Content = types.TextContent | types.ResourceLink


def text_content(text: str) -> types.TextContent:
    return types.TextContent(type="text", text=text)


def json_text(payload: Any) -> str:
    return json.dumps(payload, indent=2, default=str)


def collection_uri(collection_id: Any) -> str:
    return f"mcp://collection/{collection_id}"


def bookmark_uri(bookmark_id: Any) -> str:
    return f"mcp://raindrop/{bookmark_id}"


def collection_link(collection: dict[str, Any]) -> types.ResourceLink:
    return types.ResourceLink(
        type="resource_link",
        uri=collection_uri(collection.get("_id")),
        name=collection.get("title") or "Untitled Collection",
        description=collection.get("description")
        or f"Collection with {collection.get('count') or 0} bookmarks",
        mimeType=JSON_MIME,
    )


def bookmark_link(bookmark: dict[str, Any]) -> types.ResourceLink:
    return types.ResourceLink(
        type="resource_link",
        uri=bookmark_uri(bookmark.get("_id")),
        name=bookmark.get("title") or "Untitled",
        description=bookmark.get("excerpt") or "No description",
        mimeType=JSON_MIME,
    )


def summary_with_links(summary: str, links: list[types.ResourceLink]) -> list[Content]:
    """One summary text item first, then one link per row."""
    return [text_content(summary), *links]
