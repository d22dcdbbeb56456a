"""Tests for the seeded noise field."""

import numpy as np

from py_polymap.core.noise import NoiseField, build_permutation
from py_polymap.utils.random import RandomNumberGenerator


def test_permutation_consumes_fixed_draws():
    """Test that building the permutation uses a fixed number of draws."""
    rng = RandomNumberGenerator("perm")
    perm = build_permutation(rng)
    assert rng.draws == 255
    assert len(perm) == 512
    assert sorted(perm[:256].tolist()) == list(range(256))
    np.testing.assert_array_equal(perm[:256], perm[256:])


class TestNoiseField:
    """Test sampling behaviour."""

    def test_range(self):
        """Test that samples stay within range."""
        noise = NoiseField(RandomNumberGenerator("range"))
        for x in range(0, 600, 7):
            for y in range(0, 600, 11):
                assert -1.0 <= noise.sample(x, y) <= 1.0

    def test_reproducible(self):
        """Test that the same seed gives the same field."""
        a = NoiseField(RandomNumberGenerator("same"))
        b = NoiseField(RandomNumberGenerator("same"))
        points = [(12.5, 40.0), (300.0, 300.0), (599.0, 1.0)]
        assert [a.sample(x, y) for x, y in points] == [b.sample(x, y) for x, y in points]

    def test_seeds_produce_different_fields(self):
        """Test that different seeds give different fields."""
        a = NoiseField(RandomNumberGenerator("one"))
        b = NoiseField(RandomNumberGenerator("two"))
        samples_a = [a.sample(x, 123.0) for x in range(0, 600, 50)]
        samples_b = [b.sample(x, 123.0) for x in range(0, 600, 50)]
        assert samples_a != samples_b

    def test_coherent(self):
        """Nearby coordinates give nearby values."""
        noise = NoiseField(RandomNumberGenerator("smooth"))
        for x in range(0, 600, 25):
            assert abs(noise.sample(x, 200.0) - noise.sample(x + 0.1, 200.0)) < 0.05

    def test_varies_across_map(self):
        """Test that the field varies across the map."""
        noise = NoiseField(RandomNumberGenerator("varies"))
        values = [noise.sample(x, y) for x in range(0, 600, 60) for y in range(0, 600, 60)]
        assert max(values) - min(values) > 0.2

    def test_callable(self):
        """Test that the field can be called directly."""
        noise = NoiseField(RandomNumberGenerator("call"))
        assert noise(10.0, 20.0) == noise.sample(10.0, 20.0)
