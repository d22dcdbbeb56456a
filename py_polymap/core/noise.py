"""
Coherent 2D noise for organic coastlines.

Simplex noise whose permutation table is shuffled with the seeded generator,
so a noise field is as reproducible as the seed it was built from.
"""

import math

import numpy as np

from ..utils.random import RandomNumberGenerator

F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0

GRADIENTS = np.array(
    [
        [1, 1], [-1, 1], [1, -1], [-1, -1],
        [1, 0], [-1, 0], [1, 0], [-1, 0],
        [0, 1], [0, -1], [0, 1], [0, -1],
    ],
    dtype=np.float64,
)

DEFAULT_SCALE = 0.01


def build_permutation(rng: RandomNumberGenerator) -> np.ndarray:
    """
    Shuffle 0..255 with the generator and double the table to 512 entries.

    Consumes exactly 255 values from ``rng``.
    """
    p = np.arange(256, dtype=np.int64)
    for i in range(255):
        r = i + int(rng.uniform() * (256 - i))
        p[i], p[r] = p[r], p[i]
    return np.concatenate([p, p])


class NoiseField:
    """Seeded simplex noise sampled in map coordinates."""

    def __init__(self, rng: RandomNumberGenerator, scale: float = DEFAULT_SCALE):
        self.scale = scale
        self.perm = build_permutation(rng)
        self.perm_mod12 = self.perm % 12

    def __call__(self, x: float, y: float) -> float:
        return self.sample(x, y)

    def sample(self, x: float, y: float) -> float:
        """Return the noise value at map position (x, y), within [-1, 1]."""
        return self._simplex(x * self.scale, y * self.scale)

    def _corner(self, gi: int, x: float, y: float) -> float:
        t = 0.5 - x * x - y * y
        if t < 0:
            return 0.0
        t *= t
        g = GRADIENTS[gi]
        return t * t * (g[0] * x + g[1] * y)

    def _simplex(self, x: float, y: float) -> float:
        # Skew into simplex cell space
        s = (x + y) * F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        ii = i & 255
        jj = j & 255
        perm = self.perm
        gi0 = self.perm_mod12[ii + perm[jj]]
        gi1 = self.perm_mod12[ii + i1 + perm[jj + j1]]
        gi2 = self.perm_mod12[ii + 1 + perm[jj + 1]]

        n0 = self._corner(gi0, x0, y0)
        n1 = self._corner(gi1, x1, y1)
        n2 = self._corner(gi2, x2, y2)

        return float(70.0 * (n0 + n1 + n2))
