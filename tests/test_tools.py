from __future__ import annotations

import pytest
from mcp import types

from mcp_raindrop.errors import InvalidArgumentsError, ToolExecutionError
from mcp_raindrop.tools import TOOLS


@pytest.mark.parametrize(
    ("tool", "arguments", "field"),
    [
        ("collection_manage", {"operation": "create"}, "title is required for create"),
        ("collection_manage", {"operation": "update", "title": "x"}, "id is required for update"),
        ("collection_manage", {"operation": "delete"}, "id is required for delete"),
        ("bookmark_manage", {"operation": "create", "url": "https://a.b"}, "collectionId is required for create"),
        ("bookmark_manage", {"operation": "update"}, "id is required for update"),
        ("bookmark_manage", {"operation": "delete"}, "id is required for delete"),
        ("tag_manage", {"operation": "rename", "collectionId": 1, "newName": "n"}, "tagNames is required for rename"),
        ("tag_manage", {"operation": "rename", "collectionId": 1, "tagNames": ["a"]}, "newName is required for rename"),
        ("tag_manage", {"operation": "merge", "collectionId": 1, "tagNames": ["a", "b"]}, "newName is required for merge"),
        ("tag_manage", {"operation": "delete", "collectionId": 1}, "tagNames is required for delete"),
        ("highlight_manage", {"operation": "create", "text": "t"}, "bookmarkId is required for create"),
        ("highlight_manage", {"operation": "create", "bookmarkId": 3}, "text is required for create"),
        ("highlight_manage", {"operation": "update"}, "id is required for update"),
        ("highlight_manage", {"operation": "delete"}, "id is required for delete"),
        ("collection_manage", {"operation": "create", "title": ""}, "title is required for create"),
        ("collection_manage", {"operation": "delete", "id": 0}, "id is required for delete"),
        ("bookmark_manage", {"operation": "create", "collectionId": 0, "url": "https://a.b"}, "collectionId is required for create"),
        ("highlight_manage", {"operation": "create", "bookmarkId": 3, "text": ""}, "text is required for create"),
    ],
)
@pytest.mark.asyncio
async def test_manage_tools_reject_missing_fields_without_calling_raindrop(
    service, raindrop, tool, arguments, field
) -> None:
    with pytest.raises(InvalidArgumentsError, match=field):
        await service.call_tool(tool, arguments)
    assert raindrop.calls == []


@pytest.mark.asyncio
async def test_rename_with_empty_tag_list_is_rejected(service, raindrop) -> None:
    with pytest.raises(InvalidArgumentsError, match="at least one"):
        await service.call_tool(
            "tag_manage", {"operation": "rename", "collectionId": 1, "tagNames": [], "newName": "n"}
        )
    assert raindrop.calls == []


@pytest.mark.asyncio
async def test_collection_delete_returns_deleted_flag(service, raindrop) -> None:
    result = await service.call_tool("collection_manage", {"operation": "delete", "id": 42})
    assert result == {"deleted": True}
    assert raindrop.calls == [("delete_collection", (42,), {})]


@pytest.mark.asyncio
async def test_collection_update_sends_only_defined_fields(service, raindrop) -> None:
    result = await service.call_tool("collection_manage", {"operation": "update", "id": 9, "color": "red"})
    assert result == {"_id": 9, "color": "red"}
    assert raindrop.calls == [("update_collection", (9, {"color": "red"}), {})]


@pytest.mark.asyncio
async def test_collection_create_passes_parent(service, raindrop) -> None:
    await service.call_tool("collection_manage", {"operation": "create", "title": "New", "parentId": 3})
    assert raindrop.calls == [("create_collection", ("New",), {"parent_id": 3})]


@pytest.mark.asyncio
async def test_collection_list_emits_summary_then_links(service) -> None:
    result = await service.call_tool("collection_list")
    assert isinstance(result, types.CallToolResult)
    summary, first, second = result.content
    assert summary.text == "Found 2 collections"
    assert str(first.uri) == "mcp://collection/1"
    assert first.name == "Reading"
    assert first.description == "Collection with 3 bookmarks"
    assert second.name == "Untitled Collection"
    assert second.description == "Work stuff"


@pytest.mark.asyncio
async def test_bookmark_search_returns_summary_and_one_link_per_item(service, raindrop) -> None:
    result = await service.call_tool("bookmark_search", {"search": "foo"})
    assert len(result.content) == 3
    assert result.content[0].type == "text"
    assert result.content[0].text == "Found 2 bookmarks"
    assert [item.type for item in result.content[1:]] == ["resource_link", "resource_link"]
    assert [str(item.uri) for item in result.content[1:]] == ["mcp://raindrop/101", "mcp://raindrop/102"]
    assert result.content[2].name == "Untitled"
    assert result.content[2].description == "No description"
    _, _, filters = raindrop.calls[0]
    assert filters["search"] == "foo"
    assert filters["collection"] is None


@pytest.mark.asyncio
async def test_bookmark_create_maps_fields(service, raindrop) -> None:
    await service.call_tool(
        "bookmark_manage",
        {
            "operation": "create",
            "collectionId": 12,
            "url": "https://example.com",
            "description": "An example",
            "tags": ["a"],
        },
    )
    assert raindrop.calls == [
        (
            "create_bookmark",
            (12, {"link": "https://example.com", "excerpt": "An example", "tags": ["a"]}),
            {},
        )
    ]


@pytest.mark.asyncio
async def test_bookmark_delete(service, raindrop) -> None:
    assert await service.call_tool("bookmark_manage", {"operation": "delete", "id": 5}) == {"deleted": True}
    assert raindrop.call_names == ["delete_bookmark"]


@pytest.mark.asyncio
async def test_tag_rename_uses_first_tag(service, raindrop) -> None:
    result = await service.call_tool(
        "tag_manage",
        {"operation": "rename", "collectionId": 0, "tagNames": ["old", "ignored"], "newName": "new"},
    )
    assert result == {"tagNames": ["old"], "newName": "new", "success": True}
    assert raindrop.calls == [("rename_tag", (0, "old", "new"), {})]


@pytest.mark.asyncio
async def test_tag_merge_and_delete(service, raindrop) -> None:
    merged = await service.call_tool(
        "tag_manage", {"operation": "merge", "collectionId": 4, "tagNames": ["a", "b"], "newName": "c"}
    )
    deleted = await service.call_tool(
        "tag_manage", {"operation": "delete", "collectionId": 4, "tagNames": ["c"]}
    )
    assert merged["success"] is True
    assert deleted == {"tagNames": ["c"], "deleted": True}
    assert raindrop.call_names == ["merge_tags", "delete_tags"]


@pytest.mark.asyncio
async def test_highlight_create_and_update(service, raindrop) -> None:
    created = await service.call_tool(
        "highlight_manage", {"operation": "create", "bookmarkId": 3, "text": "quote", "note": "n"}
    )
    await service.call_tool("highlight_manage", {"operation": "update", "id": 8, "color": "blue"})
    assert created["text"] == "quote"
    assert raindrop.calls == [
        ("create_highlight", (3, {"text": "quote", "note": "n"}), {}),
        ("update_highlight", (8, {"color": "blue"}), {}),
    ]


@pytest.mark.asyncio
async def test_get_raindrop_returns_single_link(service, raindrop) -> None:
    result = await service.call_tool("getRaindrop", {"id": "55"})
    assert len(result.content) == 1
    assert str(result.content[0].uri) == "mcp://raindrop/55"
    assert raindrop.calls == [("get_bookmark", (55,), {})]


@pytest.mark.asyncio
async def test_get_raindrop_rejects_non_numeric_id(service, raindrop) -> None:
    with pytest.raises(InvalidArgumentsError, match="abc"):
        await service.call_tool("getRaindrop", {"id": "abc"})
    assert raindrop.calls == []


@pytest.mark.asyncio
async def test_list_raindrops_defaults_limit(service, raindrop) -> None:
    result = await service.call_tool("listRaindrops", {"collectionId": "77"})
    assert result.content[0].text == "Found 2 bookmarks in collection"
    _, _, filters = raindrop.calls[0]
    assert filters == {"collection": 77, "per_page": 50}


@pytest.mark.asyncio
async def test_bulk_edit_sends_only_defined_fields(service, raindrop) -> None:
    result = await service.call_tool(
        "bulk_edit_raindrops",
        {"collectionId": 3, "ids": [1, 2], "tags": [], "collection": {"$id": 9}},
    )
    assert not result.isError
    assert result.content[0].text == "Bulk edit successful. Modified: 2"
    assert raindrop.calls == [
        ("bulk_update_raindrops", (3, {"ids": [1, 2], "tags": [], "collection": {"$id": 9}}), {})
    ]


@pytest.mark.asyncio
async def test_bulk_edit_reports_failure_as_error_result(service, raindrop) -> None:
    raindrop.bulk_response = {"result": False, "errorMessage": "collection not found"}
    result = await service.call_tool("bulk_edit_raindrops", {"collectionId": 3, "important": True})
    assert isinstance(result, types.CallToolResult)
    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].text == "Bulk edit error: collection not found"


@pytest.mark.asyncio
async def test_bulk_edit_converts_raised_api_error(service, raindrop, api_error) -> None:
    raindrop.fail_with = api_error
    result = await service.call_tool("bulk_edit_raindrops", {"collectionId": 3})
    assert result.isError is True
    assert "boom" in result.content[0].text


@pytest.mark.asyncio
async def test_other_tools_propagate_api_errors(service, raindrop, api_error) -> None:
    raindrop.fail_with = api_error
    with pytest.raises(ToolExecutionError) as excinfo:
        await service.call_tool("collection_list")
    assert excinfo.value.tool == "collection_list"
    assert excinfo.value.__cause__ is api_error


@pytest.mark.asyncio
async def test_diagnostics_links_server_resource(service, raindrop, monkeypatch) -> None:
    monkeypatch.setenv("RAINDROP_ACCESS_TOKEN", "secret")
    plain = await service.call_tool("diagnostics")
    detailed = await service.call_tool("diagnostics", {"includeEnvironment": True})

    link = plain.content[0]
    assert str(link.uri) == "diagnostics://server"
    assert link.meta["enabledTools"] == [tool.name for tool in TOOLS]
    assert "env" not in link.meta
    assert detailed.content[0].meta["env"]["RAINDROP_ACCESS_TOKEN"] == "set"
    assert raindrop.calls == []


def test_tool_names_are_unique() -> None:
    names = [tool.name for tool in TOOLS]
    assert len(names) == len(set(names))


def test_titles_capitalize_each_word_and_keep_inner_capitals() -> None:
    titles = {tool.name: tool.title for tool in TOOLS}
    assert titles["getRaindrop"] == "GetRaindrop"
    assert titles["listRaindrops"] == "ListRaindrops"
    assert titles["bulk_edit_raindrops"] == "Bulk Edit Raindrops"
