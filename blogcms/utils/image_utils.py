"""Pillow helpers for inspecting uploaded image binaries."""

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError


def read_dimensions(data: bytes) -> Tuple[int, int]:
    """Return ``(width, height)`` of an encoded image.

    Raises ValueError when the payload cannot be decoded as an image.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
        # verify() leaves the image unusable, so reopen for the size
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError(f"Not a readable image: {exc}") from exc
