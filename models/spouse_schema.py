"""Validation rules for spouse submissions.

The same ``InsertSpouse`` model backs the server's authoritative check and
the client form's pre-submission check, so the rules live only here.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models.spouse_record import SpouseRecord

# Field alias -> (minimum length, message shown when too short)
FIELD_RULES: Dict[str, tuple[int, str]] = {
    "userName": (2, "Username must be at least 2 characters"),
    "spouseName": (1, "Spouse name is required"),
    "imageData": (1, "Image is required"),
}

_GENERIC_MESSAGES = {
    "missing": "Required",
    "string_type": "Expected string",
    "model_type": "Expected object",
    "model_attributes_type": "Expected object",
}


class InsertSpouse(BaseModel):
    """Payload accepted by the create operation (no id)."""

    model_config = ConfigDict(strict=True)

    user_name: str = Field(alias="userName", min_length=FIELD_RULES["userName"][0])
    spouse_name: str = Field(alias="spouseName", min_length=FIELD_RULES["spouseName"][0])
    image_data: str = Field(alias="imageData", min_length=FIELD_RULES["imageData"][0])

    def to_record(self) -> SpouseRecord:
        """Return an unsaved SpouseRecord carrying these values."""
        return SpouseRecord(
            id=None,
            user_name=self.user_name,
            spouse_name=self.spouse_name,
            image_data=self.image_data,
        )


class SpouseValidationError(ValueError):
    """Raised when input does not satisfy the spouse schema.

    Attributes:
        issues: One ``{"path": str | None, "message": str}`` entry per failed rule.
    """

    def __init__(self, issues: List[Dict[str, Any]]) -> None:
        self.issues = issues
        super().__init__(self.message)

    @property
    def message(self) -> str:
        parts = []
        for issue in self.issues:
            if issue["path"]:
                parts.append(f'{issue["message"]} at "{issue["path"]}"')
            else:
                parts.append(issue["message"])
        return "Validation error: " + "; ".join(parts)

    @property
    def field_errors(self) -> Dict[str, str]:
        """First message per field, keyed by camelCase field name."""
        errors: Dict[str, str] = {}
        for issue in self.issues:
            if issue["path"] and issue["path"] not in errors:
                errors[issue["path"]] = issue["message"]
        return errors


def _issue_message(error: Dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    if error["type"] == "string_too_short" and loc and loc[0] in FIELD_RULES:
        return FIELD_RULES[loc[0]][1]
    return _GENERIC_MESSAGES.get(error["type"], error.get("msg", "Invalid value"))


def validate_spouse(data: Any) -> InsertSpouse:
    """Validate arbitrary input against the spouse schema.

    Args:
        data: Decoded JSON body (or form values) keyed by camelCase names.

    Returns:
        The validated ``InsertSpouse``.

    Raises:
        SpouseValidationError: If any rule fails.
    """
    try:
        return InsertSpouse.model_validate(data)
    except ValidationError as exc:
        issues = [
            {
                "path": ".".join(str(part) for part in err["loc"]) or None,
                "message": _issue_message(err),
            }
            for err in exc.errors()
        ]
        raise SpouseValidationError(issues) from exc
