from __future__ import annotations

from typing import Any

import pytest

from mcp_raindrop.errors import RaindropApiError
from mcp_raindrop.service import RaindropMcpService


class StubRaindrop:
    """Stands in for RaindropClient and records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.collections: list[dict[str, Any]] = [
            {"_id": 1, "title": "Reading", "count": 3},
            {"_id": 2, "title": "", "description": "Work stuff"},
        ]
        self.bookmarks: list[dict[str, Any]] = [
            {"_id": 101, "title": "Python", "excerpt": "The language", "link": "https://python.org"},
            {"_id": 102, "link": "https://example.com"},
        ]
        self.user: dict[str, Any] = {"_id": 7, "fullName": "Test User"}
        self.bulk_response: dict[str, Any] = {"result": True, "modified": 2}
        self.fail_with: Exception | None = None

    @property
    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((name, args, kwargs))
        if self.fail_with is not None:
            raise self.fail_with

    async def list_collections(self) -> list[dict[str, Any]]:
        self._record("list_collections")
        return self.collections

    async def get_collection(self, collection_id: int) -> dict[str, Any]:
        self._record("get_collection", collection_id)
        return {"_id": collection_id, "title": f"Collection {collection_id}"}

    async def create_collection(self, title: str, **kwargs: Any) -> dict[str, Any]:
        self._record("create_collection", title, **kwargs)
        return {"_id": 5, "title": title}

    async def update_collection(self, collection_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        self._record("update_collection", collection_id, updates)
        return {"_id": collection_id, **updates}

    async def delete_collection(self, collection_id: int) -> None:
        self._record("delete_collection", collection_id)

    async def get_bookmarks(self, **filters: Any) -> dict[str, Any]:
        self._record("get_bookmarks", **filters)
        return {"items": self.bookmarks, "count": len(self.bookmarks)}

    async def get_bookmark(self, bookmark_id: int) -> dict[str, Any]:
        self._record("get_bookmark", bookmark_id)
        return {"_id": bookmark_id, "title": "Python", "link": "https://python.org"}

    async def create_bookmark(self, collection_id: int, bookmark: dict[str, Any]) -> dict[str, Any]:
        self._record("create_bookmark", collection_id, bookmark)
        return {"_id": 900, **bookmark}

    async def update_bookmark(self, bookmark_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        self._record("update_bookmark", bookmark_id, updates)
        return {"_id": bookmark_id, **updates}

    async def delete_bookmark(self, bookmark_id: int) -> None:
        self._record("delete_bookmark", bookmark_id)

    async def bulk_update_raindrops(self, collection_id: int, body: dict[str, Any]) -> dict[str, Any]:
        self._record("bulk_update_raindrops", collection_id, body)
        return self.bulk_response

    async def rename_tag(self, collection_id: int, old_name: str, new_name: str) -> bool:
        self._record("rename_tag", collection_id, old_name, new_name)
        return True

    async def merge_tags(self, collection_id: int, tags: list[str], new_name: str) -> bool:
        self._record("merge_tags", collection_id, tags, new_name)
        return True

    async def delete_tags(self, collection_id: int, tags: list[str]) -> bool:
        self._record("delete_tags", collection_id, tags)
        return True

    async def create_highlight(self, bookmark_id: int, highlight: dict[str, Any]) -> dict[str, Any]:
        self._record("create_highlight", bookmark_id, highlight)
        return {"_id": "h1", **highlight}

    async def update_highlight(self, highlight_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        self._record("update_highlight", highlight_id, updates)
        return {"_id": str(highlight_id), **updates}

    async def delete_highlight(self, highlight_id: int) -> None:
        self._record("delete_highlight", highlight_id)

    async def get_user_info(self) -> dict[str, Any]:
        self._record("get_user_info")
        return self.user

    async def aclose(self) -> None:
        pass


@pytest.fixture
def raindrop() -> StubRaindrop:
    return StubRaindrop()


@pytest.fixture
def service(raindrop: StubRaindrop) -> RaindropMcpService:
    return RaindropMcpService(raindrop)  # type: ignore[arg-type]


@pytest.fixture
def api_error() -> RaindropApiError:
    return RaindropApiError(
        status_code=500,
        method="GET",
        url="https://api.raindrop.io/rest/v1/collection/1",
        response_text="boom",
    )
