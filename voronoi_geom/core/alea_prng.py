"""
Seedable Alea PRNG used for empty site sampling.

Based on Johannes Baagøe's Alea algorithm. Identical seeds give identical
sample sequences, which keeps partitions reproducible.
"""


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _masher():
    """Build the string hashing function used to derive the initial state."""
    n = 0xEFC8249D

    def mash(data):
        nonlocal n
        for char in str(data):
            n = n + ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * 0x100000000  # 2^32
        return _uint32(n) * 2.3283064365386963e-10  # 2^-32

    return mash


class AleaPRNG:
    """Alea generator producing floats in [0, 1)."""

    def __init__(self, seed):
        self.seed = seed
        self.call_count = 0

        mash = _masher()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self):
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low, high):
        """Generate a float in [low, high)."""
        return self.random() * (high - low) + low
