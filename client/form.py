"""Spouse submission form.

The form validates with the same schema the server uses, encodes the chosen
image as a data URI, and drives a small state machine:
``idle -> submitting -> idle`` whether the request succeeds or fails.
"""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Dict, Optional

from client.api_client import SpouseApiClient
from client.gallery import Gallery
from client.image_encoding import read_image_as_data_uri
from client.notifications import ToastQueue
from models.spouse_record import SpouseRecord
from models.spouse_schema import SpouseValidationError, validate_spouse
from utils.errors import ApiRequestError

IDLE, SUBMITTING = "idle", "submitting"


class SubmissionForm:
    """Holds field values, inline errors and the submit state."""

    def __init__(self) -> None:
        self.state = IDLE
        self.field_errors: Dict[str, str] = {}
        self.reset()

    def reset(self) -> None:
        self.user_name = ""
        self.spouse_name = ""
        self.image_data = ""
        self.preview_url: Optional[str] = None
        self.image_error: Optional[str] = None

    @property
    def submit_label(self) -> str:
        return "Adding..." if self.state == SUBMITTING else "Add Spouse"

    @property
    def submit_disabled(self) -> bool:
        return self.state == SUBMITTING

    def values(self) -> Dict[str, str]:
        return {
            "userName": self.user_name,
            "spouseName": self.spouse_name,
            "imageData": self.image_data,
        }

    async def choose_image(self, path: Path | str) -> bool:
        """Encode the chosen file and use it for both the payload and the preview.

        Returns False when the file cannot be read or is empty; the image then
        counts as not chosen and the reason is shown as the imageData error.
        """
        try:
            data_uri = await read_image_as_data_uri(path)
        except OSError:
            data_uri, self.image_error = "", "Could not read image file"
        except ValueError as exc:
            data_uri, self.image_error = "", str(exc)
        else:
            self.image_error = None

        self.image_data = data_uri
        self.preview_url = data_uri or None
        if self.image_error:
            self.field_errors["imageData"] = self.image_error
            return False
        self.field_errors.pop("imageData", None)
        return True

    def validate(self) -> bool:
        """Check the current values, filling `field_errors`. Returns True when valid."""
        try:
            validate_spouse(self.values())
        except SpouseValidationError as exc:
            self.field_errors = exc.field_errors
        else:
            self.field_errors = {}
        if self.image_error:
            self.field_errors["imageData"] = self.image_error
        return not self.field_errors

    async def submit(self, api: SpouseApiClient, gallery: Gallery, toasts: ToastQueue) -> Optional[SpouseRecord]:
        """Send the form to the create operation.

        Returns the created record, or None when blocked by validation, already
        submitting, or rejected by the server.
        """
        if self.state == SUBMITTING or not self.validate():
            return None

        self.state = SUBMITTING
        try:
            created = await api.create_spouse(self.user_name, self.spouse_name, self.image_data)
        except ApiRequestError as exc:
            toasts.push("Error", exc.message or "Failed to add spouse", variant="destructive")
            return None
        finally:
            self.state = IDLE

        self.reset()
        toasts.push("Success!", "Your spouse has been added to the collection")
        await gallery.refresh(api)
        return created

    def render(self) -> str:
        """Return the form and image preview as an HTML fragment."""

        def field(name: str, label: str, value: str, input_type: str = "text") -> str:
            error = self.field_errors.get(name)
            value_attr = f' value="{escape(value, quote=True)}"' if input_type == "text" else ' accept="image/*"'
            return (
                f'<label>{label}<input type="{input_type}" name="{name}"{value_attr}></label>'
                + (f'<p class="field-error">{escape(error)}</p>' if error else "")
            )

        if self.preview_url:
            preview = f'<img class="preview" src="{escape(self.preview_url, quote=True)}" alt="Preview">'
        else:
            preview = '<p class="preview-empty">Click to upload an image</p>'
        disabled = " disabled" if self.submit_disabled else ""
        return (
            '<form class="spouse-form">'
            + field("userName", "Your Name", self.user_name)
            + field("spouseName", "Spouse Name", self.spouse_name)
            + field("imageData", "Upload Image", "", input_type="file")
            + f'<button type="submit"{disabled}>{self.submit_label}</button>'
            + f'<div class="preview-box">{preview}</div>'
            + "</form>"
        )


def render_page(form: SubmissionForm, gallery: Gallery, toasts: Optional[ToastQueue] = None) -> str:
    """Return a complete HTML document with notifications, the form and the gallery."""
    notices = ""
    if toasts is not None:
        notices = "".join(
            f'<div class="toast {t.variant}"><strong>{escape(t.title)}</strong> {escape(t.description)}</div>'
            for t in toasts.active()
        )
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<title>Upload your cult of the lamb spouse!</title></head><body>"
        "<h1>Upload your cult of the lamb spouse!</h1>"
        f"{notices}{form.render()}{gallery.render()}"
        "</body></html>"
    )
