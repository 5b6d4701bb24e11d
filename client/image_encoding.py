"""Turn image files into self-contained data URIs before submission.

The image travels inside the JSON payload as text, so no separate binary
upload is needed. The MIME type comes from Pillow's format detection, falling
back to the filename extension.
"""
from __future__ import annotations

import base64
import io
import mimetypes
from pathlib import Path
from typing import Optional

import aiofiles
from PIL import Image, UnidentifiedImageError

DEFAULT_MIME = "application/octet-stream"


def detect_mime_type(data: bytes, filename: Optional[str] = None) -> str:
    """Return the MIME type for image bytes.

    Args:
        data: Raw file bytes.
        filename: Optional original filename used when Pillow cannot identify the bytes.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None

    if not mime and filename:
        mime, _ = mimetypes.guess_type(filename)
    return mime or DEFAULT_MIME


def encode_image_bytes(data: bytes, filename: Optional[str] = None) -> str:
    """Encode image bytes as ``data:<mime>;base64,<payload>``.

    Raises:
        ValueError: If `data` is empty.
    """
    if not data:
        raise ValueError("Image file is empty.")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{detect_mime_type(data, filename)};base64,{encoded}"


async def read_image_as_data_uri(path: Path | str) -> str:
    """Read an image file without blocking the event loop and return its data URI."""
    path = Path(path)
    async with aiofiles.open(path, "rb") as f:
        data = await f.read()
    return encode_image_bytes(data, path.name)
