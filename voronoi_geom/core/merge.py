"""
Voronoi construction and merging of raw cells per owner.

Owners are the original input features (in input order) followed by the
empty sites. A raw cell belongs to the first owner it intersects; a cell
touching several owners therefore goes to the earliest one. Raw cells that
touch no owner are kept as orphans, one merged cell each.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import structlog
from shapely.geometry import MultiPoint, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import voronoi_diagram
from shapely.prepared import prep

logger = structlog.get_logger()


@dataclass
class MergedCell:
    """Union of the raw Voronoi cells assigned to one owner."""
    owner: Optional[int]  # None for orphan cells
    geometry: BaseGeometry

    @property
    def is_orphan(self) -> bool:
        return self.owner is None


def build_voronoi(coordinates: np.ndarray, envelope: BaseGeometry) -> List[Polygon]:
    """
    Build the raw Voronoi cells of a seed set.

    Args:
        coordinates: Array of [x, y] seeds (duplicates allowed)
        envelope: Region the diagram must cover

    Returns:
        List of raw cell polygons
    """
    unique = np.unique(np.asarray(coordinates, dtype=float).reshape(-1, 2), axis=0)
    if len(unique) == 0:
        return []
    if len(unique) == 1:
        # A lone site owns the whole plane
        return [envelope.envelope]

    diagram = voronoi_diagram(MultiPoint(unique), envelope=envelope)
    cells = [g for g in diagram.geoms if g.geom_type == "Polygon"]

    logger.debug("Voronoi diagram built", sites=len(unique), cells=len(cells))
    return cells


def group_by_owner(raw_cells: Sequence[Polygon],
                   owners: Sequence[BaseGeometry]) -> List[List[Polygon]]:
    """
    Group raw cells by the first owner geometry they intersect.

    Returns:
        One list per owner (possibly empty) followed by a singleton list per orphan cell
    """
    prepared = [prep(g) for g in owners]
    groups: List[List[Polygon]] = [[] for _ in owners]
    orphans: List[List[Polygon]] = []

    for cell in raw_cells:
        idx = next((i for i, g in enumerate(prepared) if g.intersects(cell)), -1)
        if idx == -1:
            orphans.append([cell])
        else:
            groups[idx].append(cell)

    if orphans:
        logger.debug("Orphan cells found", orphans=len(orphans))
    return groups + orphans


def merge_polygons(polygons: List[Polygon]) -> BaseGeometry:
    """Union a list of polygons, popping from the end."""
    polygons = list(polygons)
    merged = polygons.pop()
    while polygons:
        merged = merged.union(polygons.pop())
    return merged


def merge_voronoi_cells(raw_cells: Sequence[Polygon],
                        owners: Sequence[BaseGeometry]) -> List[MergedCell]:
    """
    Merge raw cells into one cell per owner.

    Owners that received no raw cell produce no merged cell, so a short
    result signals that some owner lost all its cells to an earlier one.

    Args:
        raw_cells: Raw Voronoi cells
        owners: Owner geometries, original features first then empty site points

    Returns:
        MergedCell list, owners in order then orphans
    """
    groups = group_by_owner(raw_cells, owners)
    merged = []
    for idx, polygons in enumerate(groups):
        if not polygons:
            continue
        owner = idx if idx < len(owners) else None
        merged.append(MergedCell(owner=owner, geometry=merge_polygons(polygons)))
    return merged
