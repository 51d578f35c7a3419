"""
Demo scenes.

Each builder returns a ScenePreset bundling the world with the camera
placement, background and render defaults that suit it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import HittableList, Sphere, MovingSphere, XYRect, XZRect, YZRect, Box
from .materials import Lambertian, Metal, Dielectric, DiffuseLight
from .textures import CheckerTexture, NoiseTexture, ImageTexture


@dataclass
class ScenePreset:
    """A world plus the viewing parameters it was designed for.

    Every scene shares a thin lens of aperture 0.1 focused 10 units away.
    """
    world: HittableList
    look_from: Point3
    look_at: Point3
    vfov: float = 20.0
    aperture: float = 0.1
    focus_dist: float = 10.0
    background: Color = field(default_factory=lambda: Color(0.7, 0.8, 1.0))
    aspect_ratio: float = 16.0 / 9.0
    width: int = 400
    samples_per_pixel: int = 100
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    time0: float = 0.0
    time1: float = 1.0

    @property
    def height(self) -> int:
        return int(self.width / self.aspect_ratio)

    def make_camera(self, aspect_ratio: Optional[float] = None) -> Camera:
        return Camera(
            look_from=self.look_from,
            look_at=self.look_at,
            vup=self.vup,
            vfov=self.vfov,
            aspect_ratio=aspect_ratio if aspect_ratio else self.aspect_ratio,
            aperture=self.aperture,
            focus_dist=self.focus_dist,
            time0=self.time0,
            time1=self.time1
        )


def random_scene(rng: np.random.Generator) -> ScenePreset:
    """Bouncing diffuse spheres, metal and glass on a checkered ground."""
    world = HittableList()

    checker = CheckerTexture.from_colors(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse, bouncing during the shutter interval
                albedo = Vec3.random(rng) * Vec3.random(rng)
                center2 = center + Vec3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                # metal
                albedo = Vec3.random(rng, 0.5, 1)
                fuzz = rng.uniform(0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                # glass
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return ScenePreset(world, Point3(13, 2, 3), Point3(0, 0, 0))


def two_spheres(rng: np.random.Generator) -> ScenePreset:
    """Two large spheres sharing one checker texture."""
    world = HittableList()
    checker = Lambertian(CheckerTexture.from_colors(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)))

    world.add(Sphere(Point3(0, -10, 0), 10, checker))
    world.add(Sphere(Point3(0, 10, 0), 10, checker))

    return ScenePreset(world, Point3(13, 2, 3), Point3(0, 0, 0))


def _perlin_spheres(rng: np.random.Generator) -> HittableList:
    pertext = Lambertian(NoiseTexture(rng, scale=4.0))
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, pertext))
    world.add(Sphere(Point3(0, 2, 0), 2, pertext))
    return world


def two_perlin_spheres(rng: np.random.Generator) -> ScenePreset:
    """A noise-textured ground and sphere."""
    world = _perlin_spheres(rng)
    return ScenePreset(world, Point3(13, 2, 3), Point3(0, 0, 0))


def earth(rng: np.random.Generator, texture_path: Union[str, Path] = "earthmap.jpg") -> ScenePreset:
    """A globe wrapped in an image texture."""
    surface = Lambertian(ImageTexture.from_file(texture_path))
    world = HittableList([Sphere(Point3(0, 0, 0), 2, surface)])
    return ScenePreset(world, Point3(13, 2, 3), Point3(0, 0, 0))


def simple_light(rng: np.random.Generator) -> ScenePreset:
    """Noise spheres lit by a single rectangular emitter."""
    world = _perlin_spheres(rng)
    world.add(XYRect(3, 5, 1, 4, -2, DiffuseLight(Color(4, 4, 4))))

    return ScenePreset(
        world, Point3(26, 3, 6), Point3(0, 2, 0),
        background=Color(0, 0, 0),
        samples_per_pixel=400
    )


def cornell_box(rng: np.random.Generator) -> ScenePreset:
    """The classic Cornell box with two white blocks."""
    world = HittableList()

    red = Lambertian(Color(0.65, 0.05, 0.05))
    white = Lambertian(Color(0.73, 0.73, 0.73))
    green = Lambertian(Color(0.12, 0.45, 0.15))
    light = DiffuseLight(Color(15, 15, 15))

    world.add(YZRect(0, 555, 0, 555, 555, green))
    world.add(YZRect(0, 555, 0, 555, 0, red))
    world.add(XZRect(213, 343, 227, 332, 554, light))
    world.add(XZRect(0, 555, 0, 555, 0, white))
    world.add(XZRect(0, 555, 0, 555, 555, white))
    world.add(XYRect(0, 555, 0, 555, 555, white))

    world.add(Box(Point3(130, 0, 65), Point3(295, 165, 230), white))
    world.add(Box(Point3(265, 0, 295), Point3(430, 330, 460), white))

    return ScenePreset(
        world, Point3(278, 278, -800), Point3(278, 278, 0),
        vfov=40.0,
        background=Color(0, 0, 0),
        aspect_ratio=1.0,
        width=600,
        samples_per_pixel=200
    )


SCENES: dict[str, Callable[..., ScenePreset]] = {
    'random': random_scene,
    'two-spheres': two_spheres,
    'perlin': two_perlin_spheres,
    'earth': earth,
    'simple-light': simple_light,
    'cornell': cornell_box,
}
