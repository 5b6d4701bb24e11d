"""HTTP client for the spouse API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from models.spouse_record import SpouseRecord
from utils.errors import ApiRequestError

LOGGER = logging.getLogger(__name__)

SPOUSES_PATH = "/api/spouses"


class SpouseApiClient:
    """Async client for the list and create operations.

    Args:
        base_url: Server root, e.g. ``http://localhost:3000``.
        client: Optional preconfigured ``httpx.AsyncClient`` (its base_url is used as is).
    """

    def __init__(self, base_url: str = "http://localhost:3000", client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SpouseApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def list_spouses(self) -> List[SpouseRecord]:
        """Fetch every stored spouse in the order the server returns them."""
        data = await self._request("GET", SPOUSES_PATH, fallback="Failed to fetch spouses")
        return [SpouseRecord.from_dict(item) for item in data]

    async def create_spouse(self, user_name: str, spouse_name: str, image_data: str) -> SpouseRecord:
        """Submit one spouse and return the stored record including its id."""
        payload = {"userName": user_name, "spouseName": spouse_name, "imageData": image_data}
        data = await self._request("POST", SPOUSES_PATH, json=payload, fallback="Failed to add spouse")
        return SpouseRecord.from_dict(data)

    async def _request(self, method: str, path: str, *, fallback: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            LOGGER.error("%s %s failed: %s", method, path, exc)
            raise ApiRequestError(fallback) from exc

        if response.is_success:
            return response.json()

        message = fallback
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
        raise ApiRequestError(message, status_code=response.status_code)
