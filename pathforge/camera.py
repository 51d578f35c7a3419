"""
Thin-lens camera.

Image-plane coordinates run from (0, 0) at the lower left to (1, 1) at
the upper right. A ray starts on the lens disk, passes through the
matching point of the plane ``focus_dist`` in front of the lens, and is
stamped with a time drawn from the shutter interval.
"""

from __future__ import annotations
import math
from typing import Tuple

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """Look-at camera with defocus blur and a shutter interval."""

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
        time0: float = 0.0,
        time1: float = 0.0
    ):
        """Create a camera.

        Args:
            look_from: Lens center in world space
            look_at: Point at the center of the view
            vup: Approximate up direction, must not be parallel to the view
            vfov: Vertical field of view in degrees
            aspect_ratio: Image width over image height
            aperture: Lens diameter; 0 gives a pinhole with no defocus
            focus_dist: Distance from the lens to the sharp plane
            time0: Shutter open time
            time1: Shutter close time; at or below time0 every ray gets time0
        """
        plane_height = 2.0 * math.tan(math.radians(vfov) / 2)
        plane_width = aspect_ratio * plane_height

        self.w, self.u, self.v = self._basis(look_from, look_at, vup)

        # Image plane spans, placed on the focus plane
        self.origin = look_from
        self.horizontal = self.u * (plane_width * focus_dist)
        self.vertical = self.v * (plane_height * focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2
        self.time0 = time0
        self.time1 = time1

    @staticmethod
    def _basis(look_from: Point3, look_at: Point3, vup: Vec3) -> Tuple[Vec3, Vec3, Vec3]:
        """Return (w, u, v): w points away from the view, u right, v up."""
        w = (look_from - look_at).normalize()
        u = vup.cross(w).normalize()
        return w, u, w.cross(u)

    def _lens_offset(self, rng: np.random.Generator) -> Vec3:
        if self.lens_radius <= 0:
            return Vec3(0, 0, 0)
        disk = Vec3.random_in_unit_disk(rng) * self.lens_radius
        return self.u * disk.x + self.v * disk.y

    def _shutter_time(self, rng: np.random.Generator) -> float:
        if self.time1 <= self.time0:
            return self.time0
        return float(rng.uniform(self.time0, self.time1))

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate the ray through image-plane point (s, t).

        The lens is sampled before the shutter. Neither draw is made when
        the aperture or the shutter interval is empty. The direction is left
        unnormalized.
        """
        offset = self._lens_offset(rng)
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(self.origin + offset, target - self.origin - offset, self._shutter_time(rng))

    def __repr__(self) -> str:
        center = self.lower_left_corner + self.horizontal / 2 + self.vertical / 2
        return f"Camera(origin={self.origin}, view_center={center})"
