"""
Renderer module - the heart of the path tracer.

Implements:
- Recursive radiance estimation with a fixed bounce budget
- Per-pixel jittered supersampling
- Multi-threaded tile-based rendering with per-tile random streams
- 8-bit output with gamma-2 correction
"""

from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Tuple, Union
import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable
from . import ppm

logger = logging.getLogger(__name__)

# Minimum ray parameter accepted for a hit, suppresses shadow acne
T_MIN = 0.001

Tile = Tuple[int, int, int, int]


def ray_color(
    ray: Ray,
    background: Color,
    world: Hittable,
    depth: int,
    rng: np.random.Generator
) -> Color:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace
        background: Color returned for rays that escape the scene
        world: The scene to trace against
        depth: Remaining bounce budget
        rng: Random generator for material sampling

    Returns:
        One RGB radiance sample
    """
    # Bounce budget exhausted, no more light is gathered
    if depth <= 0:
        return Color(0, 0, 0)

    rec = world.hit(ray, T_MIN, float('inf'))
    if rec is None:
        return background

    emitted = rec.material.emitted(rec.u, rec.v, rec.point)
    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return emitted

    return emitted + result.attenuation * ray_color(
        result.scattered_ray, background, world, depth - 1, rng
    )


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 32
    num_threads: int = 0  # 0 = auto-detect
    background: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @classmethod
    def from_aspect(cls, width: int, aspect_ratio: float, **kwargs) -> 'RenderSettings':
        """Build settings whose height follows from width and aspect ratio."""
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the averaged radiance per pixel.

        Args:
            world: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Linear radiance as numpy array of shape (height, width, 3),
            row 0 being the top of the image
        """
        settings = self.settings
        width = settings.width
        height = settings.height
        samples = settings.samples_per_pixel
        max_depth = settings.max_depth
        background = settings.background

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        # One independent stream per tile keeps results independent of scheduling
        streams = np.random.SeedSequence(settings.seed).spawn(len(tiles))

        u_scale = 1.0 / max(width - 1, 1)
        v_scale = 1.0 / max(height - 1, 1)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, depth %d, %d tiles on %d threads",
            width, height, samples, max_depth, len(tiles), settings.num_threads
        )

        def render_tile(job: Tuple[Tile, np.random.SeedSequence]) -> Tuple[Tile, np.ndarray]:
            """Render a single tile."""
            tile, stream = job
            rng = np.random.default_rng(stream)
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for j in range(y0, y1):
                row = height - 1 - j
                for i in range(x0, x1):
                    pixel_color = Color(0, 0, 0)

                    for _ in range(samples):
                        u = (i + rng.random()) * u_scale
                        v = (row + rng.random()) * v_scale
                        ray = camera.get_ray(u, v, rng)
                        pixel_color = pixel_color + ray_color(ray, background, world, max_depth, rng)

                    tile_image[j - y0, i - x0] = pixel_color.to_array() / samples

            logger.debug("Finished tile %s", tile)
            return tile, tile_image

        jobs = list(zip(tiles, streams))
        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                self._collect(image, executor.map(render_tile, jobs), len(jobs))
        else:
            self._collect(image, map(render_tile, jobs), len(jobs))

        logger.info("Render finished")
        return image

    def _collect(self, image: np.ndarray, results, total: int) -> None:
        """Copy finished tiles into the image, reporting progress."""
        for done, (tile, tile_image) in enumerate(results, start=1):
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image
            if self._progress_callback:
                self._progress_callback(done / total)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, top rows first
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    @staticmethod
    def to_ldr(image: np.ndarray) -> np.ndarray:
        """Convert averaged radiance to 8-bit with gamma-2 correction.

        Args:
            image: Linear radiance array (float64)

        Returns:
            Image as uint8 array of the same shape
        """
        linear = np.clip(np.nan_to_num(image, nan=0.0), 0.0, None)
        corrected = np.sqrt(linear)
        return (256 * np.clip(corrected, 0.0, 0.999)).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: Union[str, Path]) -> None:
        """Save image to file.

        Args:
            image: Image array (linear float or uint8)
            filename: Output filename; ``.ppm`` is written as plain-text P3,
                other extensions go through Pillow
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            with open(path, 'w', encoding='ascii', newline='\n') as f:
                ppm.write_ppm(image, f)
        else:
            PILImage.fromarray(image, 'RGB').save(path)
        logger.info("Saved %s", path)
