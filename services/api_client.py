# services/api_client.py
"""Thin async client for the task manager REST API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from core.log import get_logger
from core.settings import API
from models.schedule import Schedule
from models.task import Task

logger = get_logger("api")


class ApiError(RuntimeError):
    """Transport failure or a payload the calendar cannot read."""


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or API.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else API.timeout_sec
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("%s %s%s", method, self.base_url, url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"{method} {url} returned invalid JSON") from exc

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", url, json=data or {})

    async def put(self, url: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PUT", url, json=data or {})

    async def delete(self, url: str) -> Any:
        return await self.request("DELETE", url)


def _unwrap_list(payload: Any, what: str) -> List[Dict[str, Any]]:
    if payload is None:
        return []
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
        if payload is None:
            return []
    if not isinstance(payload, list):
        raise ApiError(f"Unexpected {what} payload: {type(payload).__name__}")
    return payload


async def fetch_tasks(client: ApiClient) -> List[Task]:
    items = _unwrap_list(await client.get(API.tasks_path), "tasks")
    try:
        return [Task.from_payload(item) for item in items]
    except (AttributeError, TypeError, ValueError) as exc:
        raise ApiError(f"Invalid task record: {exc}") from exc


async def fetch_schedules(client: ApiClient) -> List[Schedule]:
    items = _unwrap_list(await client.get(API.schedules_path), "schedules")
    try:
        return [Schedule.from_payload(item) for item in items]
    except (AttributeError, TypeError, ValueError) as exc:
        raise ApiError(f"Invalid schedule record: {exc}") from exc


__all__ = ["ApiClient", "ApiError", "fetch_schedules", "fetch_tasks"]
