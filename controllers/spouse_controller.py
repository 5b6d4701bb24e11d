"""Controller for listing and creating spouse submissions."""

import logging
from typing import Any, Dict, List, Tuple, Union

from dal.spouse_dal import SpouseStore
from models.spouse_schema import SpouseValidationError, validate_spouse
from utils.errors import StorageError

LOGGER = logging.getLogger(__name__)

Payload = Union[Dict[str, Any], List[Dict[str, Any]]]


class SpouseController:
    """Coordinate spouse requests between the HTTP routes and the data store."""

    def __init__(self, store: SpouseStore, expose_details: bool = False) -> None:
        """
        Args:
            store: Data store used for persistence (SpouseDAL or a substitute).
            expose_details: Include the storage error text in 500 responses.
        """
        self.store = store
        self.expose_details = expose_details

    async def list_spouses(self) -> Tuple[int, Payload]:
        """Return `(status, body)` for the list operation."""
        try:
            spouses = await self.store.list_spouses()
        except StorageError as exc:
            LOGGER.error("Error fetching spouses: %s", exc)
            return 500, self._failure("Failed to fetch spouses", exc)
        return 200, [spouse.to_dict() for spouse in spouses]

    async def create_spouse(self, body: Any) -> Tuple[int, Payload]:
        """Validate `body` and persist it, returning `(status, body)`.

        Args:
            body: Decoded JSON request body of any shape.
        """
        try:
            payload = validate_spouse(body)
        except SpouseValidationError as exc:
            LOGGER.error("Validation error: %s", exc.message)
            return 400, {"message": exc.message}

        try:
            spouse = await self.store.create_spouse(payload.to_record())
        except StorageError as exc:
            LOGGER.error("Error creating spouse: %s", exc)
            return 500, self._failure("Failed to add spouse", exc)
        return 201, spouse.to_dict()

    def _failure(self, message: str, exc: Exception) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": message}
        if self.expose_details:
            body["details"] = str(exc)
        return body
