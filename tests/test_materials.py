"""Tests for material system."""

import pytest
import math
import numpy as np

from pathforge.vec3 import Vec3, Point3, Color
from pathforge.ray import Ray
from pathforge.shapes import HitRecord
from pathforge.materials import Lambertian, Metal, Dielectric, DiffuseLight
from pathforge.textures import CheckerTexture, SolidColor


@pytest.fixture
def rng():
    return np.random.default_rng(2024)


def make_record(point=Point3(0, 0, 0), normal=Vec3(0, 1, 0), front_face=True, u=0.0, v=0.0):
    return HitRecord(point=point, normal=normal, t=1.0, material=Lambertian(Color(1, 1, 1)),
                     front_face=front_face, u=u, v=v)


class TestLambertian:
    """Test Lambertian diffuse material."""

    def test_scatter_always_succeeds(self, rng):
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        for _ in range(100):
            assert mat.scatter(ray_in, make_record(), rng) is not None

    def test_scattered_from_hit_point_into_hemisphere(self, rng):
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        rec = make_record(point=Point3(1, 2, 3))
        ray_in = Ray(Point3(1, 5, 3), Vec3(0, -1, 0), 0.3)

        for _ in range(100):
            result = mat.scatter(ray_in, rec, rng)
            assert result.scattered_ray.origin == rec.point
            assert result.scattered_ray.time == 0.3
            assert result.scattered_ray.direction.dot(rec.normal) >= 0
            assert not result.scattered_ray.direction.near_zero()

    def test_attenuation_matches_albedo(self, rng):
        albedo = Color(0.8, 0.2, 0.3)
        result = Lambertian(albedo).scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), make_record(), rng)
        assert result.attenuation == albedo

    def test_attenuation_uses_texture_at_hit(self, rng):
        checker = CheckerTexture.from_colors(Color(1, 1, 1), Color(0, 0, 0))
        mat = Lambertian(checker)
        ray_in = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))

        for p in (Point3(0.1, 0.1, 0.1), Point3(-0.1, 0.1, 0.1), Point3(0.2, 0.05, -0.3)):
            rec = make_record(point=p, u=0.3, v=0.7)
            result = mat.scatter(ray_in, rec, rng)
            assert result.attenuation == checker.value(0.3, 0.7, p)

    def test_does_not_emit(self):
        assert Lambertian(Color(1, 1, 1)).emitted(0, 0, Point3(0, 0, 0)) == Color(0, 0, 0)


class TestMetal:
    """Test Metal material."""

    def test_perfect_reflection(self, rng):
        mat = Metal(Color(1, 1, 1), fuzz=0.0)
        ray_in = Ray(Point3(-1, 1, 0), Vec3(1, -1, 0))
        result = mat.scatter(ray_in, make_record(), rng)

        assert result is not None
        assert result.scattered_ray.direction == Vec3(1, 1, 0).normalize()

    def test_mirror_of_arbitrary_direction(self, rng):
        mat = Metal(Color(0.9, 0.8, 0.7))
        normal = Vec3(1, 2, -1).normalize()
        incoming = Vec3(-0.3, -1.0, 0.6)
        result = mat.scatter(Ray(Point3(0, 3, 0), incoming), make_record(normal=normal), rng)

        unit = incoming.normalize()
        expected = unit - normal * (2 * unit.dot(normal))
        assert result.scattered_ray.direction == expected
        assert result.attenuation == Color(0.9, 0.8, 0.7)

    def test_fuzz_is_clamped(self):
        assert Metal(Color(1, 1, 1), fuzz=3.0).fuzz == 1.0

    def test_fuzz_varies_direction(self, rng):
        mat = Metal(Color(1, 1, 1), fuzz=0.5)
        ray_in = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        directions = [mat.scatter(ray_in, make_record(), rng).scattered_ray.direction for _ in range(20)]
        assert any(d != directions[0] for d in directions[1:])

    def test_no_scatter_below_surface(self, rng):
        mat = Metal(Color(1, 1, 1), fuzz=1.0)
        ray_in = Ray(Point3(0, 0, 0), Vec3(1, -0.05, 0))
        normal = Vec3(0, 1, 0)

        outcomes = [mat.scatter(ray_in, make_record(normal=normal), rng) for _ in range(200)]
        scattered = [r for r in outcomes if r is not None]

        assert len(scattered) < len(outcomes)  # Some grazing reflections are absorbed
        assert scattered
        for result in scattered:
            assert result.scattered_ray.direction.dot(normal) > 0


class TestDielectric:
    """Test Dielectric (glass) material."""

    def test_always_scatters_with_white_attenuation(self, rng):
        mat = Dielectric(1.5)
        ray_in = Ray(Point3(-1, 1, 0), Vec3(1, -1, 0))
        for front_face in (True, False):
            for _ in range(50):
                result = mat.scatter(ray_in, make_record(front_face=front_face), rng)
                assert result is not None
                assert result.attenuation == Color(1, 1, 1)

    def test_matching_index_passes_undeviated(self, rng):
        mat = Dielectric(1.0)
        direction = Vec3(0, -1, 0)
        for _ in range(50):
            result = mat.scatter(Ray(Point3(0, 1, 0), direction), make_record(), rng)
            assert result.scattered_ray.direction == direction

    def test_matching_index_grazing_ray_is_never_reflected(self, rng):
        mat = Dielectric(1.0)
        direction = Vec3(1, -0.05, 0).normalize()
        for front_face in (True, False):
            for _ in range(1000):
                rec = make_record(front_face=front_face)
                result = mat.scatter(Ray(Point3(-1, 0.05, 0), direction), rec, rng)
                assert result.scattered_ray.direction == direction

    def test_total_internal_reflection(self, rng):
        mat = Dielectric(1.5)
        normal = Vec3(0, 1, 0)
        # Leaving glass at a grazing angle: 1.5 * sin(theta) > 1
        direction = Vec3(0.9, -0.1, 0).normalize()
        for _ in range(50):
            result = mat.scatter(Ray(Point3(0, 1, 0), direction), make_record(normal=normal, front_face=False), rng)
            assert result.scattered_ray.direction == direction.reflect(normal)

    def test_entering_bends_towards_normal(self, rng):
        mat = Dielectric(1.5)
        direction = Vec3(1, -1, 0).normalize()
        results = [mat.scatter(Ray(Point3(-1, 1, 0), direction), make_record(), rng) for _ in range(100)]
        transmitted = [r.scattered_ray.direction for r in results if r.scattered_ray.direction.y < 0]

        assert transmitted
        for d in transmitted:
            sin_out = d.x / d.length()
            assert abs(sin_out - math.sin(math.pi / 4) / 1.5) < 1e-9

    def test_schlick_reflectance(self):
        assert Dielectric._reflectance(1.0, 1.5) == pytest.approx(0.04)
        assert Dielectric._reflectance(0.0, 1.5) == pytest.approx(1.0)


class TestDiffuseLight:
    """Test DiffuseLight material."""

    def test_never_scatters(self, rng):
        light = DiffuseLight(Color(4, 4, 4))
        assert light.scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), make_record(), rng) is None

    def test_emits_constant_color(self):
        light = DiffuseLight(Color(4, 3, 2))
        assert light.emitted(0, 0, Point3(0, 0, 0)) == Color(4, 3, 2)
        assert light.emitted(0.7, 0.1, Point3(5, -3, 2)) == Color(4, 3, 2)

    def test_accepts_texture(self):
        light = DiffuseLight(SolidColor.from_rgb(1, 2, 3))
        assert light.emitted(0.5, 0.5, Point3(1, 1, 1)) == Color(1, 2, 3)
