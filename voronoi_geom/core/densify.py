"""
Boundary densification for diagram seed sites.

Feature rings are resampled so that no two consecutive seeds are further
apart than a target length. Dense seeds along a boundary make the merged
Voronoi cells of a feature hug that boundary, so the feature ends up inside
its own cell.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import structlog

logger = structlog.get_logger()


@dataclass
class DensifiedSites:
    """Seed coordinates produced by one densification pass."""

    interval: Optional[float]      # target segment length (None: nothing to split)
    per_feature: List[np.ndarray]  # seeds of each decomposed feature, in order

    @property
    def coordinates(self) -> np.ndarray:
        """All feature-derived seeds concatenated."""
        if not self.per_feature:
            return np.empty((0, 2))
        return np.vstack(self.per_feature)

    def __len__(self):
        return sum(len(c) for c in self.per_feature)


def get_average_length(rings: List[np.ndarray]) -> Optional[float]:
    """
    Mean Euclidean length of all consecutive coordinate pairs.

    Single-coordinate rings contribute nothing.

    Returns:
        Mean length, or None when there is no segment of positive length
    """
    lengths = [
        np.hypot(*np.diff(ring, axis=0).T)
        for ring in rings
        if len(ring) > 1
    ]
    if not lengths:
        return None

    mean = float(np.concatenate(lengths).mean())
    return mean if mean > 0 else None


def get_fractions(num: int) -> np.ndarray:
    """
    Fractions splitting a segment into ``num`` equal parts.

    get_fractions(2) -> [0.5]
    get_fractions(3) -> [0.333, 0.667]
    """
    return np.arange(1, num) / num


def interpolate_segment(a: np.ndarray, b: np.ndarray, max_length: Optional[float]) -> np.ndarray:
    """
    Points between a and b so that no gap exceeds max_length.

    Endpoints are not included.

    Args:
        a: Segment start
        b: Segment end
        max_length: Largest allowed spacing

    Returns:
        Array of interior [x, y] points (possibly empty)
    """
    length = math.hypot(b[0] - a[0], b[1] - a[1])
    if max_length is None or length <= max_length:
        return np.empty((0, 2))

    fractions = get_fractions(math.ceil(length / max_length))
    return a + fractions[:, None] * (b - a)


def densify_ring(ring: np.ndarray, max_length: Optional[float]) -> np.ndarray:
    """
    Resample one ring.

    The first coordinate is emitted once and any later coordinate equal to it
    is skipped, so closed polygon rings do not repeat their start seed.
    """
    if not len(ring):
        return np.empty((0, 2))

    start = ring[0]
    parts = [ring[:1]]
    for a, b in zip(ring[:-1], ring[1:]):
        parts.append(interpolate_segment(a, b, max_length))
        if not (b[0] == start[0] and b[1] == start[1]):
            parts.append(b[None, :])
    return np.vstack(parts)


def densify_rings(rings: List[np.ndarray], max_length: Optional[float]) -> DensifiedSites:
    """
    Densify every feature ring.

    Args:
        rings: Coordinate ring of each decomposed feature
        max_length: Target spacing (mean length on the first pass)

    Returns:
        DensifiedSites with per-feature seeds
    """
    if max_length is not None and max_length <= 0:
        raise ValueError(f"Densification interval must be positive, got {max_length}")

    per_feature = [densify_ring(ring, max_length) for ring in rings]
    sites = DensifiedSites(interval=max_length, per_feature=per_feature)

    logger.debug("Rings densified", interval=max_length, seeds=len(sites))
    return sites
