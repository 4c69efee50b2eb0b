"""Inline (data URL) encoding of user photos and the shared size ceiling."""

from __future__ import annotations

import base64
import re

from .exceptions import EmptyImageError, ImageIntakeError, ImageTooLargeError

MAX_IMAGE_BYTES = 5 * 1024 * 1024
DEFAULT_CONTENT_TYPE = "image/jpeg"

_DATA_URL_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]+)*?);base64,(?P<data>.*)$",
    re.DOTALL,
)


def ensure_within_limit(size: int, limit: int = MAX_IMAGE_BYTES) -> None:
    if size <= 0:
        raise EmptyImageError("Image is empty")
    if size > limit:
        raise ImageTooLargeError(size, limit)


def encode_data_url(data: bytes, content_type: str | None = None) -> str:
    """Encode raw image bytes as a ``data:<mime>;base64,...`` URL.

    The size check runs before any encoding work.
    """
    ensure_within_limit(len(data))
    mime = content_type or DEFAULT_CONTENT_TYPE
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{payload}"


def decoded_size(data_url: str) -> int:
    """Byte size of the image carried by a base64 data URL, without decoding it."""
    match = _DATA_URL_RE.match(data_url.strip())
    if match is None:
        raise ImageIntakeError("Image must be a base64 data URL")
    payload = re.sub(r"\s+", "", match.group("data"))
    if not payload:
        return 0
    padding = len(payload) - len(payload.rstrip("="))
    return (len(payload) * 3) // 4 - padding

