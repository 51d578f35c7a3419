"""Tests for motion blur functionality."""

import pytest
import numpy as np

from pathforge.vec3 import Vec3, Point3, Color
from pathforge.ray import Ray
from pathforge.shapes import MovingSphere, HittableList
from pathforge.camera import Camera
from pathforge.materials import DiffuseLight
from pathforge.renderer import ray_color


class TestMotionBlur:
    """Camera shutter sampling combined with moving geometry."""

    def make_scene(self):
        sphere = MovingSphere(
            center0=Point3(0, 0, 0),
            center1=Point3(2, 0, 0),
            time0=0.0,
            time1=1.0,
            radius=0.5,
            material=DiffuseLight(Color(1, 1, 1))
        )
        camera = Camera(
            look_from=Point3(1, 0, 10),
            look_at=Point3(1, 0, 0),
            vup=Vec3(0, 1, 0),
            vfov=20,
            aspect_ratio=1.0,
            time0=0.0,
            time1=1.0
        )
        return HittableList([sphere]), camera

    def test_ray_time_drives_hit(self):
        world, _ = self.make_scene()
        ray = Ray(Point3(0, 0, 10), Vec3(0, 0, -1), time=0.0)
        assert world.hit(ray, 0.001, float('inf')) is not None
        late = Ray(Point3(0, 0, 10), Vec3(0, 0, -1), time=1.0)
        assert world.hit(late, 0.001, float('inf')) is None

    def test_averaged_samples_are_partial(self):
        world, camera = self.make_scene()
        rng = np.random.default_rng(21)
        background = Color(0, 0, 0)

        # A camera ray aimed at the start position sees the sphere only part of the time
        s = 0.5 - 1.0 / (2 * camera.horizontal.length())
        samples = [ray_color(camera.get_ray(s, 0.5, rng), background, world, 5, rng).x
                   for _ in range(200)]
        coverage = sum(samples) / len(samples)
        assert 0.1 < coverage < 0.5
