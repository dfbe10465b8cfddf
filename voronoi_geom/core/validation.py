"""Topological checks on merged Voronoi cells."""

from typing import List, Sequence

import structlog
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from .merge import MergedCell

logger = structlog.get_logger()


def validate_partition(features: Sequence[BaseGeometry],
                       empty_sites: Sequence[BaseGeometry],
                       cells: List[MergedCell]) -> bool:
    """
    Check that every feature and every empty site lies in exactly one cell.

    Args:
        features: Original feature geometries
        empty_sites: Empty site points
        cells: Merged cells

    Returns:
        True if the partition encloses each feature and site exactly once
    """
    prepared = [prep(cell.geometry) for cell in cells]

    for kind, geoms in (("feature", features), ("empty_site", empty_sites)):
        for idx, geom in enumerate(geoms):
            hits = sum(1 for p in prepared if p.covers(geom))
            if hits != 1:
                logger.debug("Containment check failed", kind=kind, index=idx, cells=hits)
                return False
    return True
