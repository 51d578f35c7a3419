"""
Three-component vectors for points, directions and RGB colors.

Components are stored in a float64 numpy array. Every operation returns a
new vector, and vectors are never mutated after construction.

Random sampling helpers take an explicit ``numpy.random.Generator`` so
that sample streams are reproducible and never shared between workers.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

Operand = Union['Vec3', float]


def _raw(value: Operand):
    """Unwrap a vector to its array; scalars pass through for broadcasting."""
    return value._data if isinstance(value, Vec3) else value


class Vec3:
    """An immutable 3D vector backed by a numpy array."""

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Wrap an array of three floats without copying it."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Channel names when the vector holds a color
    r = x
    g = y
    b = z

    def __getitem__(self, axis: int) -> float:
        return float(self._data[axis])

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return np.allclose(self._data, other._data)

    # Equality is approximate, so no hash can agree with it
    __hash__ = None

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data + _raw(other))

    def __sub__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data - _raw(other))

    def __rsub__(self, other: float) -> Vec3:
        return Vec3.from_array(other - self._data)

    def __mul__(self, other: Operand) -> Vec3:
        # Component-wise for two vectors, scaling for a scalar
        return Vec3.from_array(self._data * _raw(other))

    def __truediv__(self, other: Operand) -> Vec3:
        return Vec3.from_array(self._data / _raw(other))

    __radd__ = __add__
    __rmul__ = __mul__

    def dot(self, other: Vec3) -> float:
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        ax, ay, az = self._data
        bx, by, bz = other._data
        return Vec3(ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Return the unit vector with the same direction.

        The zero vector has no direction and comes back as the zero vector;
        callers that divide by a length must check for it themselves.
        """
        length = self.length()
        if length == 0:
            return Vec3(0, 0, 0)
        return self / length

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """True when every component is smaller than epsilon in magnitude."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def reflect(self, normal: Vec3) -> Vec3:
        """Mirror about a unit normal: v - 2(v.n)n."""
        return self - normal * (2 * self.dot(normal))

    def refract(self, normal: Vec3, eta_ratio: float) -> Vec3:
        """Bend this unit vector through a surface by Snell's law.

        Args:
            normal: Unit surface normal on the incoming side
            eta_ratio: Incident index over transmitted index

        Returns:
            The transmitted direction. Callers decide about total internal
            reflection before calling; no zero vector is returned for it.
        """
        cos_theta = min(-self.dot(normal), 1.0)
        perpendicular = (self + normal * cos_theta) * eta_ratio
        parallel = normal * -math.sqrt(abs(1.0 - perpendicular.length_squared()))
        return perpendicular + parallel

    def to_array(self) -> np.ndarray:
        """Copy of the components as a numpy array."""
        return self._data.copy()

    @staticmethod
    def random(rng: np.random.Generator, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        """Components drawn independently from [min_val, max_val)."""
        return Vec3.from_array(rng.uniform(min_val, max_val, 3))

    @staticmethod
    def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
        """Rejection-sample the cube [-1, 1)^3 until a point lies inside the ball."""
        while True:
            p = Vec3.random(rng, -1, 1)
            if p.length_squared() < 1:
                return p

    @staticmethod
    def random_unit_vector(rng: np.random.Generator) -> Vec3:
        while True:
            p = Vec3.random_in_unit_sphere(rng)
            if not p.near_zero():
                return p.normalize()

    @staticmethod
    def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
        """A point with z = 0 strictly inside the unit circle."""
        while True:
            x, y = rng.uniform(-1, 1, 2)
            if x * x + y * y < 1:
                return Vec3(x, y, 0)


# Readability aliases
Point3 = Vec3
Color = Vec3
