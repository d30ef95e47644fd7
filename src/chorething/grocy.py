"""Async client for the Grocy REST API."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import httpx

from chorething.errors import DecodeError, HTTPStatusError, TransportError
from chorething.models import Chore, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

API_KEY_HEADER = "GROCY-API-KEY"


class GrocyClient:
    """
    Reads chores and users from a Grocy instance.

    A new HTTP connection is opened per call. There are no retries; the
    caller decides what a failed fetch means.

    Example:
        client = GrocyClient("http://localhost:8080/api", "secret")
        chores = await client.fetch_chores()
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self._transport = transport

    async def fetch_chores(self) -> list[Chore]:
        """Get all chores. Raises TransportError, HTTPStatusError or DecodeError."""
        return await self._fetch_list("chores", Chore.from_json)

    async def fetch_users(self) -> list[User]:
        """Get all users. Raises TransportError, HTTPStatusError or DecodeError."""
        return await self._fetch_list("users", User.from_json)

    async def _fetch_list(self, resource: str, decode: Callable[[Any], T]) -> list[T]:
        url = f"{self.base_url}/{resource}"
        logger.debug("Requesting URL: %s", url)

        headers = {
            API_KEY_HEADER: self.api_key,
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.get(url, headers=headers)
        except httpx.DecodingError as e:
            raise DecodeError(f"{resource}: could not decode response body: {e}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to get {resource}: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise HTTPStatusError(resource, resp.status_code, resp.reason_phrase)

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"{resource}: response is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DecodeError(f"{resource}: expected a JSON array, got {type(data).__name__}")

        return [decode(item) for item in data]


def overview_url(grocy_url: str, user_id: int) -> str:
    """
    Build the web link to the chores overview.

    The API URL usually ends in /api; the web UI lives one level up.
    """
    base_url = grocy_url
    if base_url.endswith("/api"):
        base_url = base_url[:-4]

    url = f"{base_url}/choresoverview"
    if user_id > 0:
        url = f"{url}?user={user_id}"
    return url
