"""
Empty site sampling.

Empty sites are extra Voronoi seeds with no owning feature. They are drawn
uniformly inside a bounding box or bounding polygon and must not coincide
with an already accepted site or fall on any input feature.
"""

from typing import Any, Dict, List, Sequence, Tuple, Union

import structlog
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from ..utils.geojson import read_geometry
from ..utils.random import RandomSource
from .bounds import BoundingBox
from .errors import GenerationExhausted

logger = structlog.get_logger()

Coordinate = Tuple[float, float]
Bounds = Union[BoundingBox, BaseGeometry]


def coord_in_bbox(bbox: BoundingBox, prng: RandomSource) -> Coordinate:
    """Uniform random coordinate inside a bounding box."""
    return (
        prng.random() * (bbox[2] - bbox[0]) + bbox[0],
        prng.random() * (bbox[3] - bbox[1]) + bbox[1],
    )


def coord_in_polygon(polygon: BaseGeometry, prng: RandomSource, max_attempts: int) -> Coordinate:
    """
    Uniform random coordinate inside a polygon, by rejection from its bbox.

    Raises:
        GenerationExhausted: If no draw lands inside within max_attempts
    """
    bbox = polygon.bounds
    prepared = prep(polygon)
    for _ in range(max_attempts):
        coord = coord_in_bbox(bbox, prng)
        if prepared.contains(Point(coord)):
            return coord
    raise GenerationExhausted(
        f"Could not sample a coordinate inside the bounding polygon in {max_attempts} tries",
        iterations=max_attempts,
    )


class SiteSampler:
    """Draws empty sites that avoid each other and a set of features."""

    def __init__(self, bounds: Bounds, avoid: List[Dict[str, Any]],
                 prng: RandomSource, max_attempts: int = 1000):
        """
        Args:
            bounds: Bounding box tuple or shapely polygon to sample in
            avoid: Features no site may touch
            prng: Random source
            max_attempts: Draws allowed per site before giving up
        """
        self.bounds = bounds
        self.prng = prng
        self.max_attempts = max_attempts
        self._avoid = [prep(read_geometry(f["geometry"])) for f in avoid]

    def draw(self) -> Coordinate:
        """One coordinate inside the bounds."""
        if isinstance(self.bounds, BaseGeometry):
            return coord_in_polygon(self.bounds, self.prng, self.max_attempts)
        return coord_in_bbox(self.bounds, self.prng)

    def collides(self, coord: Coordinate, accepted: Sequence[Coordinate]) -> bool:
        """True if coord equals an accepted site or touches an avoided feature."""
        if any(c[0] == coord[0] and c[1] == coord[1] for c in accepted):
            return True
        point = Point(coord)
        return any(geom.intersects(point) for geom in self._avoid)

    def sample(self, count: int) -> List[Coordinate]:
        """
        Draw ``count`` non-colliding sites.

        Raises:
            GenerationExhausted: If a site cannot be placed within max_attempts draws
        """
        accepted: List[Coordinate] = []
        rejected = 0
        for _ in range(count):
            for _ in range(self.max_attempts):
                coord = self.draw()
                if not self.collides(coord, accepted):
                    accepted.append(coord)
                    break
                rejected += 1
            else:
                logger.warning("Empty site sampling exhausted",
                               accepted=len(accepted), requested=count,
                               max_attempts=self.max_attempts)
                raise GenerationExhausted(
                    f"Could not place empty site {len(accepted) + 1} of {count} "
                    f"in {self.max_attempts} tries",
                    iterations=self.max_attempts,
                )

        logger.debug("Empty sites sampled", count=count, rejected=rejected)
        return accepted


def create_coords(bounds: Bounds, avoid: List[Dict[str, Any]], num_coordinates: int,
                  prng: RandomSource, max_attempts: int = 1000) -> List[Coordinate]:
    """Sample ``num_coordinates`` empty sites; see :class:`SiteSampler`."""
    if num_coordinates <= 0:
        return []
    return SiteSampler(bounds, avoid, prng, max_attempts).sample(num_coordinates)
