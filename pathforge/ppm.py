"""
Plain-text PPM (P3) encoding.

Layout: ``P3``, ``<width> <height>``, ``255``, then one
``r g b`` line per pixel, top row first, left to right.
"""

from __future__ import annotations
from typing import TextIO

import numpy as np

MAX_VALUE = 255


def encode_ppm(image: np.ndarray) -> str:
    """Encode an 8-bit (height, width, 3) image as P3 text."""
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {image.shape}")
    if not np.issubdtype(image.dtype, np.integer):
        raise ValueError(f"Expected integer channel values, got {image.dtype}")

    height, width = image.shape[:2]
    lines = ["P3", f"{width} {height}", str(MAX_VALUE)]
    for r, g, b in image.reshape(-1, 3).tolist():
        lines.append(f"{r} {g} {b}")
    return "\n".join(lines) + "\n"


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write an 8-bit image to a text stream in P3 format."""
    stream.write(encode_ppm(image))
