"""
Materials system.

Implements:
- Lambertian diffuse (textured albedo)
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)
- Diffuse light (emitter)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Vec3, Color, Point3
from .ray import Ray
from .textures import Texture, SolidColor

if TYPE_CHECKING:
    from .shapes import HitRecord


def _as_texture(value: Union[Color, Texture]) -> Texture:
    if isinstance(value, Texture):
        return value
    return SolidColor(value)


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials.

    Materials are immutable and may be shared by any number of shapes.
    """

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: Intersection record for the hit being shaded
            rng: Random generator for stochastic scattering

        Returns:
            ScatterResult if the ray scatters, None if it is absorbed
        """
        pass

    def emitted(self, u: float, v: float, point: Point3) -> Color:
        """Return emitted light color. Default is no emission."""
        return Color(0, 0, 0)


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Union[Color, Texture]):
        """Create a Lambertian material.

        Args:
            albedo: Base color, or a texture evaluated at each hit
        """
        self.albedo = _as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = rec.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterResult(
            scattered_ray=Ray(rec.point, scatter_direction, ray_in.time),
            attenuation=self.albedo.value(rec.u, rec.v, rec.point)
        )


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Reflection blur radius (0 = mirror, 1 = very rough)
        """
        self.albedo = albedo
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(rec.normal)
        if self.fuzz > 0:
            reflected = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        # Absorb reflections that end up below the surface
        if reflected.dot(rec.normal) <= 0:
            return None

        return ScatterResult(
            scattered_ray=Ray(rec.point, reflected, ray_in.time),
            attenuation=self.albedo
        )


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, ior: float = 1.5):
        """Create a dielectric material.

        Args:
            ior: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.ior = ior

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        # Entering the medium from outside or leaving it
        refraction_ratio = 1.0 / self.ior if rec.front_face else self.ior

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0
        # Matching indices form no interface, so nothing is reflected
        fresnel_reflect = (
            refraction_ratio != 1.0
            and self._reflectance(cos_theta, refraction_ratio) > rng.random()
        )

        if cannot_refract or fresnel_reflect:
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, refraction_ratio)

        return ScatterResult(
            scattered_ray=Ray(rec.point, direction, ray_in.time),
            attenuation=Color(1, 1, 1)
        )

    @staticmethod
    def _reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)


class DiffuseLight(Material):
    """Light-emitting material. Never scatters."""

    def __init__(self, emit: Union[Color, Texture]):
        self.emit = _as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        return None

    def emitted(self, u: float, v: float, point: Point3) -> Color:
        return self.emit.value(u, v, point)
