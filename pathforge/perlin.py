"""
Perlin-style value noise.

The table holds three independent permutations of 0..255 and 256 random
scalars, generated once from the supplied random generator. Lattice
coordinates wrap with ``& 255``.
"""

from __future__ import annotations
import math

import numpy as np

from .vec3 import Point3

POINT_COUNT = 256


class Perlin:
    """Immutable noise table with plain and smoothed lookups."""

    def __init__(self, rng: np.random.Generator):
        """Build the noise table.

        Args:
            rng: Random generator consumed only during construction
        """
        self._ranfloat = rng.random(POINT_COUNT)
        self._perm_x = self._generate_perm(rng)
        self._perm_y = self._generate_perm(rng)
        self._perm_z = self._generate_perm(rng)

    @staticmethod
    def _generate_perm(rng: np.random.Generator) -> np.ndarray:
        """Return a shuffled permutation of 0..POINT_COUNT-1."""
        p = np.arange(POINT_COUNT, dtype=np.int64)
        # Fisher-Yates from the top down
        for i in range(POINT_COUNT - 1, 0, -1):
            target = int(rng.integers(0, i + 1))
            p[i], p[target] = p[target], p[i]
        return p

    def _hash(self, i: int, j: int, k: int) -> float:
        return float(self._ranfloat[
            self._perm_x[i & 255] ^ self._perm_y[j & 255] ^ self._perm_z[k & 255]
        ])

    def lattice_noise(self, p: Point3) -> float:
        """Blocky noise: direct lookup of the lattice cell at 4x frequency."""
        return self._hash(int(4 * p.x), int(4 * p.y), int(4 * p.z))

    def noise(self, p: Point3) -> float:
        """Smoothed noise in [0, 1).

        Hashes the 8 lattice corners around ``p`` and blends them with
        trilinear weights taken from the fractional offsets.
        """
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fx, p.y - fy, p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        accum = 0.0
        for di in (0, 1):
            wi = u if di else 1 - u
            for dj in (0, 1):
                wj = v if dj else 1 - v
                for dk in (0, 1):
                    wk = w if dk else 1 - w
                    accum += wi * wj * wk * self._hash(i + di, j + dj, k + dk)
        return accum
