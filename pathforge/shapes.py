"""
Geometric shapes for the path tracer.

Each shape implements the Hittable protocol with a `hit` method that
returns the nearest intersection inside the open interval (t_min, t_max),
or None.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material

# Rays closer than this to parallel with a rectangle's plane miss it
PARALLEL_EPSILON = 1e-8


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The surface normal at the intersection (always points against ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        material: The material at the hit point
        u, v: Texture coordinates at the hit point
    """
    point: Point3
    normal: Vec3
    t: float
    material: Material
    front_face: bool = True
    u: float = 0.0
    v: float = 0.0

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Set the normal to always point against the ray direction.

        Args:
            ray: The incoming ray
            outward_normal: The geometric normal pointing outward from surface
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            t_min: Lower bound on t, exclusive (avoids self-intersection)
            t_max: Upper bound on t, exclusive (closest hit so far)

        Returns:
            HitRecord for the nearest intersection, None otherwise
        """
        pass


def _sphere_uv(p: Vec3) -> tuple[float, float]:
    """Get spherical UV coordinates for a point on the unit sphere.

    u: returned value [0,1] of angle around the Y axis from X=-1
    v: returned value [0,1] of angle from Y=-1 to Y=+1
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi


def _hit_sphere(
    center: Point3,
    radius: float,
    material: Material,
    ray: Ray,
    t_min: float,
    t_max: float
) -> Optional[HitRecord]:
    """Ray-sphere intersection using the quadratic formula.

    The equation (P-C)·(P-C) = r² where P = ray.at(t)
    expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0.
    """
    oc = ray.origin - center
    a = ray.direction.length_squared()
    if a == 0:
        return None
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius

    discriminant = half_b * half_b - a * c
    if discriminant < 0:
        return None

    sqrtd = math.sqrt(discriminant)

    # Find the nearest root in the acceptable range
    root = (-half_b - sqrtd) / a
    if root <= t_min or root >= t_max:
        root = (-half_b + sqrtd) / a
        if root <= t_min or root >= t_max:
            return None

    point = ray.at(root)
    outward_normal = (point - center) / radius
    u, v = _sphere_uv(outward_normal)

    rec = HitRecord(point=point, normal=outward_normal, t=root, material=material, u=u, v=v)
    rec.set_face_normal(ray, outward_normal)
    return rec


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (negative flips the normals inward)
            material: Material for shading
        """
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return _hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class MovingSphere(Hittable):
    """A sphere that moves linearly between two positions over time.

    Used for motion blur effects.
    """

    def __init__(
        self,
        center0: Point3,
        center1: Point3,
        time0: float,
        time1: float,
        radius: float,
        material: Material
    ):
        """Create a moving sphere.

        Args:
            center0: Center position at time0
            center1: Center position at time1
            time0: Start time
            time1: End time
            radius: Radius of the sphere
            material: Material for shading
        """
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Point3:
        """Get the center position at a given time."""
        if self.time1 == self.time0:
            return self.center0
        t = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * t

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return _hit_sphere(self.center(ray.time), self.radius, self.material, ray, t_min, t_max)


class AxisAlignedRect(Hittable):
    """A rectangle lying in a plane of constant coordinate along one axis.

    Subclasses pick the fixed axis; ``a`` and ``b`` are the two in-plane
    axes in (x, y, z) order, so the outward normal is the positive fixed axis.
    """

    axis: int = 2
    a_axis: int = 0
    b_axis: int = 1

    def __init__(
        self,
        a0: float,
        a1: float,
        b0: float,
        b1: float,
        k: float,
        material: Material
    ):
        """Create a rectangle.

        Args:
            a0, a1: Bounds along the first in-plane axis
            b0, b1: Bounds along the second in-plane axis
            k: Coordinate of the plane along the fixed axis
            material: Material for shading
        """
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material

        normal = [0.0, 0.0, 0.0]
        normal[self.axis] = 1.0
        self.outward_normal = Vec3(*normal)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Intersect the ray with the rectangle's plane and test the bounds."""
        d = ray.direction[self.axis]
        if abs(d) < PARALLEL_EPSILON:
            return None

        t = (self.k - ray.origin[self.axis]) / d
        if t <= t_min or t >= t_max:
            return None

        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord(
            point=ray.at(t),
            normal=self.outward_normal,
            t=t,
            material=self.material,
            u=(a - self.a0) / (self.a1 - self.a0),
            v=(b - self.b0) / (self.b1 - self.b0)
        )
        rec.set_face_normal(ray, self.outward_normal)
        return rec

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.a0}, {self.a1}, "
                f"{self.b0}, {self.b1}, k={self.k})")


class XYRect(AxisAlignedRect):
    """Rectangle in the plane z = k, spanning x in [x0, x1] and y in [y0, y1]."""
    axis, a_axis, b_axis = 2, 0, 1


class XZRect(AxisAlignedRect):
    """Rectangle in the plane y = k, spanning x in [x0, x1] and z in [z0, z1]."""
    axis, a_axis, b_axis = 1, 0, 2


class YZRect(AxisAlignedRect):
    """Rectangle in the plane x = k, spanning y in [y0, y1] and z in [z0, z1]."""
    axis, a_axis, b_axis = 0, 1, 2


class HittableList(Hittable):
    """A collection of hittable objects."""

    def __init__(self, objects: Optional[list[Hittable]] = None):
        self.objects: list[Hittable] = objects if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the list."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Find the closest intersection among all objects."""
        closest_hit: Optional[HitRecord] = None
        closest_t = t_max

        for obj in self.objects:
            hit_record = obj.hit(ray, t_min, closest_t)
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)


class Box(Hittable):
    """An axis-aligned box made of six rectangles."""

    def __init__(self, p0: Point3, p1: Point3, material: Material):
        """Create a box from two opposite corners.

        Args:
            p0: Corner with the smallest coordinates
            p1: Corner with the largest coordinates
            material: Material shared by all six faces
        """
        self.box_min = p0
        self.box_max = p1
        self.material = material

        self.sides = HittableList([
            XYRect(p0.x, p1.x, p0.y, p1.y, p1.z, material),
            XYRect(p0.x, p1.x, p0.y, p1.y, p0.z, material),
            XZRect(p0.x, p1.x, p0.z, p1.z, p1.y, material),
            XZRect(p0.x, p1.x, p0.z, p1.z, p0.y, material),
            YZRect(p0.y, p1.y, p0.z, p1.z, p1.x, material),
            YZRect(p0.y, p1.y, p0.z, p1.z, p0.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max)

    def __repr__(self) -> str:
        return f"Box(min={self.box_min}, max={self.box_max})"
