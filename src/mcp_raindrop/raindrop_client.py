"""Async client for the Raindrop.io REST API (v1)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import RaindropApiError
from .log import ContextLogger, get_logger
from .settings import Settings

DEFAULT_BASE_URL = "https://api.raindrop.io/rest/v1"


class RaindropClient:
    """Thin wrapper around Raindrop.io's REST API."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 15.0,
        logger: logging.Logger | ContextLogger | None = None,
    ) -> None:
        self._logger = logger or get_logger("raindrop-client")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=httpx.Timeout(timeout_seconds),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> RaindropClient:
        return cls(
            token=settings.raindrop_access_token,
            base_url=str(settings.raindrop_base_url),
            timeout_seconds=settings.http_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        method = method.upper()
        url_path = path if path.startswith("/") else f"/{path}"
        self._logger.debug("%s %s", method, url_path)

        resp = await self._client.request(method, url_path, params=params, json=json_body)
        if resp.status_code >= 400:
            raise RaindropApiError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=(resp.text or "").strip(),
            )

        data = resp.json()
        if not isinstance(data, dict):
            raise RaindropApiError(
                status_code=resp.status_code,
                method=method,
                url=str(resp.request.url),
                response_text=f"Unexpected JSON type: {type(data).__name__}",
            )
        return data

    async def _request_item(
        self,
        method: str,
        path: str,
        *,
        key: str = "item",
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        data = await self.request_json(method, path, json_body=json_body)
        item = data.get(key)
        if not isinstance(item, dict):
            raise RaindropApiError(
                status_code=200,
                method=method.upper(),
                url=path,
                response_text=f"Response has no '{key}'",
            )
        return item

    # Collections

    async def list_collections(self) -> list[dict[str, Any]]:
        data = await self.request_json("GET", "/collections")
        return list(data.get("items") or [])

    async def get_collection(self, collection_id: int) -> dict[str, Any]:
        return await self._request_item("GET", f"/collection/{collection_id}")

    async def create_collection(
        self,
        title: str,
        *,
        public: bool = False,
        parent_id: int | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title, "public": public}
        if parent_id is not None:
            payload["parent"] = {"$id": parent_id}
        return await self._request_item("POST", "/collection", json_body=payload)

    async def update_collection(self, collection_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._request_item("PUT", f"/collection/{collection_id}", json_body=updates)

    async def delete_collection(self, collection_id: int) -> None:
        await self.request_json("DELETE", f"/collection/{collection_id}")

    # Bookmarks (raindrops)

    async def get_bookmarks(
        self,
        *,
        search: str | None = None,
        collection: int | None = None,
        tags: list[str] | None = None,
        tag: str | None = None,
        important: bool | None = None,
        page: int | None = None,
        per_page: int | None = None,
        sort: str | None = None,
        duplicates: bool | None = None,
        broken: bool | None = None,
        highlight: bool | None = None,
        domain: str | None = None,
    ) -> dict[str, Any]:
        """Search bookmarks; without ``collection`` the search spans every collection."""
        query: dict[str, Any] = {}
        if search:
            query["search"] = search
        if tags:
            query["tag"] = ",".join(tags)
        # A single ``tag`` wins over ``tags``.
        if tag:
            query["tag"] = tag
        if important is not None:
            query["important"] = important
        if page:
            query["page"] = page
        if per_page:
            query["perpage"] = per_page
        if sort:
            query["sort"] = sort
        if duplicates is not None:
            query["duplicates"] = duplicates
        if broken is not None:
            query["broken"] = broken
        if highlight is not None:
            query["highlight"] = highlight
        if domain:
            query["domain"] = domain

        data = await self.request_json("GET", f"/raindrops/{collection or 0}", params=query)
        return {
            "items": list(data.get("items") or []),
            "count": data.get("count") or 0,
        }

    async def get_bookmark(self, bookmark_id: int) -> dict[str, Any]:
        return await self._request_item("GET", f"/raindrop/{bookmark_id}")

    async def create_bookmark(self, collection_id: int, bookmark: dict[str, Any]) -> dict[str, Any]:
        payload: dict[str, Any] = {k: v for k, v in bookmark.items() if v is not None}
        payload.setdefault("important", False)
        payload["collection"] = {"$id": collection_id}
        payload["pleaseParse"] = {}
        return await self._request_item("POST", "/raindrop", json_body=payload)

    async def update_bookmark(self, bookmark_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._request_item("PUT", f"/raindrop/{bookmark_id}", json_body=updates)

    async def delete_bookmark(self, bookmark_id: int) -> None:
        await self.request_json("DELETE", f"/raindrop/{bookmark_id}")

    async def bulk_update_raindrops(self, collection_id: int, body: dict[str, Any]) -> dict[str, Any]:
        """Update many raindrops of a collection at once; returns the raw response body."""
        return await self.request_json("PUT", f"/raindrops/{collection_id}", json_body=body)

    # Tags

    @staticmethod
    def _tags_path(collection_id: int | None) -> str:
        return f"/tags/{collection_id or 0}"

    async def rename_tag(self, collection_id: int | None, old_name: str, new_name: str) -> bool:
        data = await self.request_json(
            "PUT",
            self._tags_path(collection_id),
            json_body={"replace": new_name, "tags": [old_name]},
        )
        return bool(data.get("result"))

    async def merge_tags(self, collection_id: int | None, tags: list[str], new_name: str) -> bool:
        data = await self.request_json(
            "PUT",
            self._tags_path(collection_id),
            json_body={"replace": new_name, "tags": tags},
        )
        return bool(data.get("result"))

    async def delete_tags(self, collection_id: int | None, tags: list[str]) -> bool:
        data = await self.request_json(
            "DELETE",
            self._tags_path(collection_id),
            json_body={"tags": tags},
        )
        return bool(data.get("result"))

    # Highlights

    async def create_highlight(self, bookmark_id: int, highlight: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in highlight.items() if v is not None}
        payload["raindrop"] = {"$id": bookmark_id}
        payload.setdefault("color", "yellow")
        return await self._request_item("POST", "/highlights", json_body=payload)

    async def update_highlight(self, highlight_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return await self._request_item("PUT", f"/highlights/{highlight_id}", json_body=updates)

    async def delete_highlight(self, highlight_id: int) -> None:
        await self.request_json("DELETE", f"/highlights/{highlight_id}")

    # User

    async def get_user_info(self) -> dict[str, Any]:
        return await self._request_item("GET", "/user", key="user")
