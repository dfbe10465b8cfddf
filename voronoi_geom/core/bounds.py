"""Bounding box helpers for feature collections."""

from typing import Any, Dict, List, Tuple

import shapely
from shapely.geometry import Polygon

from ..utils.geojson import read_geometry

BoundingBox = Tuple[float, float, float, float]


def get_feature_bounds(features: List[Dict[str, Any]]) -> BoundingBox:
    """
    Compute the bounding box of a list of features.

    Raises:
        ValueError: If there are no features to bound
    """
    if not features:
        raise ValueError("Cannot compute bounds of an empty feature list")

    geoms = [read_geometry(f["geometry"]) for f in features]
    min_x, min_y, max_x, max_y = shapely.total_bounds(geoms)
    return (float(min_x), float(min_y), float(max_x), float(max_y))


def extend_bounds(bounds: BoundingBox, fraction: float) -> BoundingBox:
    """
    Grow a bounding box on every side.

    The margin is ``fraction`` of the smaller of width and height.
    """
    width = abs(bounds[2] - bounds[0])
    height = abs(bounds[3] - bounds[1])
    extend = min(width, height) * fraction
    return (bounds[0] - extend, bounds[1] - extend, bounds[2] + extend, bounds[3] + extend)


def bbox_to_polygon(bounds: BoundingBox) -> Polygon:
    """Rectangle polygon covering a bounding box."""
    min_x, min_y, max_x, max_y = bounds
    return Polygon([
        (min_x, min_y),
        (max_x, min_y),
        (max_x, max_y),
        (min_x, max_y),
        (min_x, min_y),
    ])
