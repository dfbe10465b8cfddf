"""Tests for the Alea PRNG and random source helpers."""

from voronoi_geom.core.alea_prng import AleaPRNG
from voronoi_geom.utils.random import make_prng


class TestAleaPRNG:
    """Test seeded random generation."""

    def test_same_seed_same_sequence(self):
        a = AleaPRNG("test_seed")
        b = AleaPRNG("test_seed")

        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_different_seeds(self):
        a = AleaPRNG("seed1")
        b = AleaPRNG("seed2")

        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_range(self):
        prng = AleaPRNG("range")
        values = [prng.random() for _ in range(1000)]

        assert all(0 <= v < 1 for v in values)
        assert prng.call_count == 1000

    def test_uniform(self):
        prng = AleaPRNG("uniform")
        values = [prng.uniform(-3, 7) for _ in range(200)]

        assert all(-3 <= v < 7 for v in values)


class TestMakePrng:
    """Test PRNG creation for generation calls."""

    def test_seeded(self):
        assert make_prng("abc").random() == AleaPRNG("abc").random()

    def test_unseeded_calls_differ(self):
        assert make_prng().seed != make_prng().seed
