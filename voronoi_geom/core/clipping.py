"""Clipping merged cells to the bounding region."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import structlog
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from ..utils.geojson import to_feature
from .merge import MergedCell

logger = structlog.get_logger()


@dataclass
class OutputCell:
    """
    A single clipped polygon and the owner it was generated for.

    The polygon may carry interior rings when the owner's cell encloses
    the cells of other owners, for example a closed line around a point.
    """
    owner: Optional[int]
    geometry: Polygon

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON Feature without properties."""
        return to_feature(self.geometry)


def polygon_parts(geom: BaseGeometry) -> List[Polygon]:
    """Non-empty polygons making up geom, in order."""
    if geom.is_empty:
        return []
    if geom.geom_type == "Polygon":
        return [geom]
    if hasattr(geom, "geoms"):
        parts = []
        for part in geom.geoms:
            parts.extend(polygon_parts(part))
        return parts
    return []


def clip_cells(cells: Sequence[MergedCell], region: BaseGeometry) -> List[OutputCell]:
    """
    Intersect each merged cell with the region.

    Multi-part results are split into one output cell per part, emitted
    together and tagged with the same owner.

    Args:
        cells: Merged cells in processing order
        region: Bounding polygon

    Returns:
        Output cells
    """
    output = []
    dropped = 0
    for cell in cells:
        parts = polygon_parts(region.intersection(cell.geometry))
        if not parts:
            dropped += 1
        output.extend(OutputCell(owner=cell.owner, geometry=part) for part in parts)

    logger.debug("Cells clipped", cells=len(cells), output=len(output), dropped=dropped)
    return output
