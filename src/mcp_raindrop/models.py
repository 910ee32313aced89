"""Tool argument/result schemas and facade metadata models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ArgsModel(BaseModel):
    """Tool arguments: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntityModel(BaseModel):
    """Raindrop entities keep every field the API returns."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# Tool arguments


class DiagnosticsArgs(ArgsModel):
    include_environment: bool | None = Field(default=None, description="Include environment info")


class CollectionListArgs(ArgsModel):
    pass


class CollectionManageArgs(ArgsModel):
    operation: Literal["create", "update", "delete"]
    id: int | None = Field(default=None, description="Collection ID (update/delete)")
    title: str | None = Field(default=None, description="Collection title (required for create)")
    color: str | None = Field(default=None, description="Collection color")
    description: str | None = Field(default=None, description="Collection description")
    parent_id: int | None = Field(default=None, description="Parent collection ID (create)")


class BookmarkSearchArgs(ArgsModel):
    search: str | None = Field(default=None, description="Full-text search query")
    collection: int | None = Field(default=None, description="Collection ID to search within")
    tags: list[str] | None = Field(default=None, description="Tags to filter by")
    important: bool | None = Field(default=None, description="Filter by important bookmarks")
    page: int | None = Field(default=None, ge=0, description="Page number for pagination")
    per_page: int | None = Field(default=None, ge=1, le=50, description="Items per page (max 50)")
    sort: str | None = Field(default=None, description="Sort order (score, title, -created, created)")
    tag: str | None = Field(default=None, description="Single tag to filter by")
    duplicates: bool | None = Field(default=None, description="Include duplicate bookmarks")
    broken: bool | None = Field(default=None, description="Include broken links")
    highlight: bool | None = Field(default=None, description="Only bookmarks with highlights")
    domain: str | None = Field(default=None, description="Filter by domain")


class BookmarkManageArgs(ArgsModel):
    operation: Literal["create", "update", "delete"]
    collection_id: int | None = Field(default=None, description="Target collection (required for create)")
    id: int | None = Field(default=None, description="Bookmark ID (update/delete)")
    url: str | None = Field(default=None, description="Bookmark URL")
    title: str | None = Field(default=None, description="Bookmark title")
    description: str | None = Field(default=None, description="Bookmark excerpt")
    tags: list[str] | None = Field(default=None, description="Tags to set")
    important: bool | None = Field(default=None, description="Mark as favorite")


class TagManageArgs(ArgsModel):
    operation: Literal["rename", "merge", "delete"]
    collection_id: int = Field(description="Collection scope for the tags (0 for all collections)")
    tag_names: list[str] | None = Field(default=None, description="Tags to rename, merge or delete")
    new_name: str | None = Field(default=None, description="New tag name (rename/merge)")


class HighlightManageArgs(ArgsModel):
    operation: Literal["create", "update", "delete"]
    bookmark_id: int | None = Field(default=None, description="Bookmark to highlight (create)")
    id: int | None = Field(default=None, description="Highlight ID (update/delete)")
    text: str | None = Field(default=None, description="Highlighted text (required for create)")
    note: str | None = Field(default=None, description="Note attached to the highlight")
    color: str | None = Field(default=None, description="Highlight color")


class GetRaindropArgs(ArgsModel):
    id: str = Field(min_length=1, description="Bookmark ID")


class ListRaindropsArgs(ArgsModel):
    collection_id: str = Field(min_length=1, description="Collection ID")
    limit: int | None = Field(default=None, ge=1, le=100, description="Maximum number of bookmarks")


class CollectionRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="$id")


class BulkEditRaindropsArgs(ArgsModel):
    collection_id: int = Field(description="Collection to update raindrops in")
    ids: list[int] | None = Field(
        default=None,
        description="Raindrop IDs to update. If omitted, all in collection are updated.",
    )
    important: bool | None = Field(default=None, description="Mark as favorite (true/false)")
    tags: list[str] | None = Field(default=None, description="Tags to set. Empty array removes all tags.")
    media: list[str] | None = Field(
        default=None, description="Media URLs to set. Empty array removes all media."
    )
    cover: str | None = Field(default=None, description="Cover URL. Use <screenshot> for auto screenshot.")
    collection: CollectionRef | None = Field(default=None, description="Move to another collection.")
    nested: bool | None = Field(default=None, description="Include nested collections.")


# Tool results


class ContentItem(BaseModel):
    type: str
    text: str | None = None
    uri: str | None = None
    name: str | None = None
    description: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


class ContentResult(BaseModel):
    content: list[ContentItem]
    is_error: bool | None = Field(default=None, alias="isError")


class Collection(EntityModel):
    id: int = Field(alias="_id")
    title: str
    description: str | None = None
    color: str | None = None
    count: int | None = None


class Bookmark(EntityModel):
    id: int = Field(alias="_id")
    link: str
    title: str | None = None
    excerpt: str | None = None
    tags: list[str] = Field(default_factory=list)
    important: bool | None = None


class BookmarkPage(BaseModel):
    items: list[Bookmark]
    count: int


class Highlight(EntityModel):
    id: str | int = Field(alias="_id")
    text: str
    note: str | None = None
    color: str | None = None


class TagOperationResult(BaseModel):
    tag_names: list[str] = Field(alias="tagNames")
    new_name: str | None = Field(default=None, alias="newName")
    success: bool | None = None
    deleted: bool | None = None


# Facade metadata


class ToolInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")
    output_schema: dict[str, Any] = Field(default_factory=dict, alias="outputSchema")


class ResourceInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    uri: str
    title: str
    description: str
    mime_type: str = Field(default="application/json", alias="mimeType")


class ServerInfo(BaseModel):
    name: str
    version: str
    description: str
