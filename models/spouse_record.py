from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SpouseRecord:
    """In-memory representation of a row in the spouses table.

    Attributes:
        id: Primary key assigned by the database (None for new records).
        user_name: Name of the person who submitted the spouse.
        spouse_name: Name of the spouse.
        image_data: Data URI holding the base64-encoded image.
    """

    id: Optional[int]
    user_name: str
    spouse_name: str
    image_data: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase JSON shape used on the wire."""
        return {
            "id": self.id,
            "userName": self.user_name,
            "spouseName": self.spouse_name,
            "imageData": self.image_data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpouseRecord":
        """Build a record from the camelCase JSON shape."""
        return cls(
            id=data.get("id"),
            user_name=data["userName"],
            spouse_name=data["spouseName"],
            image_data=data["imageData"],
        )
