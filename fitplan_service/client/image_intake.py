from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from ..images import DEFAULT_CONTENT_TYPE, MAX_IMAGE_BYTES, encode_data_url, ensure_within_limit


@dataclass(frozen=True)
class SelectedImage:
    filename: str
    content_type: str
    size: int
    data_url: str


def encode_image(data: bytes, *, filename: str = "photo", content_type: str | None = None) -> SelectedImage:
    ensure_within_limit(len(data), MAX_IMAGE_BYTES)
    mime = content_type or mimetypes.guess_type(filename)[0] or DEFAULT_CONTENT_TYPE
    return SelectedImage(filename=filename, content_type=mime, size=len(data), data_url=encode_data_url(data, mime))


def load_image(path: str | Path) -> SelectedImage:
    """Read a photo from disk. The size ceiling is checked before the file is read."""
    path = Path(path)
    ensure_within_limit(path.stat().st_size, MAX_IMAGE_BYTES)
    return encode_image(path.read_bytes(), filename=path.name)
