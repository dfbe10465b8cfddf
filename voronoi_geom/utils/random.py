"""
Random source helpers.

All randomness in partition generation flows through one object exposing
``random()``. Callers may pass their own (tests use scripted sequences);
otherwise an Alea PRNG is created per call.
"""

import uuid
from typing import Optional, Protocol

from ..core.alea_prng import AleaPRNG


class RandomSource(Protocol):
    """Anything producing floats in [0, 1) from ``random()``."""

    def random(self) -> float:
        ...


def new_seed() -> str:
    """Create a fresh seed string."""
    return uuid.uuid4().hex


def make_prng(seed: Optional[str] = None) -> AleaPRNG:
    """
    Create the PRNG for one generation call.

    Args:
        seed: Seed string; a fresh one is drawn when omitted

    Returns:
        AleaPRNG instance
    """
    return AleaPRNG(seed if seed is not None else new_seed())
