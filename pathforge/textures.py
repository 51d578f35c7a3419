"""
Texture system for the path tracer.

Implements:
- Solid color textures
- 3D checker pattern
- Perlin noise textures
- Image textures (from pre-decoded pixel arrays or files)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
import math

import numpy as np
from PIL import Image

from .perlin import Perlin
from .vec3 import Color, Point3


class Texture(ABC):
    """Abstract base class for textures."""

    @abstractmethod
    def value(self, u: float, v: float, point: Point3) -> Color:
        """Get the texture color at the given surface location.

        Args:
            u: Horizontal texture coordinate [0, 1]
            v: Vertical texture coordinate [0, 1]
            point: 3D point in world space (for procedural textures)

        Returns:
            Color at this location
        """
        pass


class SolidColor(Texture):
    """A solid color texture."""

    def __init__(self, color: Color):
        self.color = color

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> 'SolidColor':
        return cls(Color(r, g, b))

    def value(self, u: float, v: float, point: Point3) -> Color:
        return self.color


class CheckerTexture(Texture):
    """A 3D checker pattern driven by the sign of a product of sines."""

    def __init__(self, even: Texture, odd: Texture):
        """Create a checker texture.

        Args:
            even: Texture where sin(10x)sin(10y)sin(10z) >= 0
            odd: Texture where the product is negative
        """
        self.even = even
        self.odd = odd

    @classmethod
    def from_colors(cls, c1: Color, c2: Color) -> 'CheckerTexture':
        return cls(SolidColor(c1), SolidColor(c2))

    def value(self, u: float, v: float, point: Point3) -> Color:
        sines = math.sin(10 * point.x) * math.sin(10 * point.y) * math.sin(10 * point.z)
        if sines < 0:
            return self.odd.value(u, v, point)
        return self.even.value(u, v, point)


class NoiseTexture(Texture):
    """Grey-scale Perlin noise texture."""

    def __init__(self, rng: np.random.Generator, scale: float = 1.0, smooth: bool = True):
        """Create a noise texture.

        Args:
            rng: Generator used to build the noise table
            scale: Frequency multiplier applied to the hit point
            smooth: Trilinear-interpolated noise if True, blocky lattice noise otherwise
        """
        self.noise = Perlin(rng)
        self.scale = scale
        self.smooth = smooth

    def value(self, u: float, v: float, point: Point3) -> Color:
        p = point * self.scale
        if self.smooth:
            n = self.noise.noise(p)
        else:
            n = self.noise.lattice_noise(p)
        return Color(1, 1, 1) * n


class ImageTexture(Texture):
    """A texture backed by a decoded RGB pixel array."""

    def __init__(self, pixels: Optional[np.ndarray] = None):
        """Wrap pre-decoded pixel data.

        Args:
            pixels: Array of shape (height, width, 3), row 0 at the top.
                Integer arrays are treated as 8-bit and scaled to [0, 1].
        """
        self._data: Optional[np.ndarray] = None
        self._width = 0
        self._height = 0
        if pixels is not None:
            data = np.asarray(pixels)
            if np.issubdtype(data.dtype, np.integer):
                data = data.astype(np.float64) / 255.0
            else:
                data = data.astype(np.float64)
            self._data = data
            self._height, self._width = data.shape[:2]

    @classmethod
    def from_file(cls, filename: Union[str, Path]) -> 'ImageTexture':
        """Decode an image file into a texture."""
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(f"Texture file not found: {filename}")

        with Image.open(path) as img:
            pixels = np.array(img.convert('RGB'), dtype=np.uint8)
        return cls(pixels)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def value(self, u: float, v: float, point: Point3) -> Color:
        if self._data is None:
            return Color(0, 1, 1)  # Cyan for missing texture data

        # Clamp UV coordinates, flip v to image rows (row 0 is the top)
        u = max(0.0, min(1.0, u))
        v = 1.0 - max(0.0, min(1.0, v))

        i = min(int(u * self._width), self._width - 1)
        j = min(int(v * self._height), self._height - 1)

        pixel = self._data[j, i]
        return Color(pixel[0], pixel[1], pixel[2])
