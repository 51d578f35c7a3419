"""
PathForge - A Python Monte-Carlo Path Tracer

Renders scenes of spheres, moving spheres, axis-aligned rectangles and
boxes with support for:
- Diffuse, metal, dielectric and light-emitting materials
- Solid, checker, Perlin noise and image textures
- Depth of field and motion blur
- Reproducible, multi-threaded rendering
- Plain-text PPM output
"""

__version__ = "0.1.0"
__author__ = "PathForge Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .perlin import Perlin
from .textures import Texture, SolidColor, CheckerTexture, NoiseTexture, ImageTexture
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric, DiffuseLight
from .shapes import (
    HitRecord, Hittable, HittableList, Sphere, MovingSphere,
    AxisAlignedRect, XYRect, XZRect, YZRect, Box
)
from .camera import Camera
from .renderer import Renderer, RenderSettings, ray_color
from .ppm import encode_ppm, write_ppm
from .scenes import ScenePreset, SCENES
