"""
Input feature normalization.

This module handles:
- Splitting Multi* geometries into their single members
- Dropping polygon holes (only the outer ring seeds the diagram)
- Optional simplification of lines and polygon rings
- Extracting the coordinate ring of a decomposed feature
"""

from typing import Any, Dict, List

import numpy as np
import structlog

from ..utils.geojson import read_geometry, to_feature, write_geometry

logger = structlog.get_logger()

# Geometry types a decomposed feature may have
POINT = "Point"
LINE_STRING = "LineString"
POLYGON = "Polygon"


def _split_feature(feature: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Split one feature into single-ring Point/LineString/Polygon features."""
    geometry = feature["geometry"]
    geom_type = geometry["type"]
    coordinates = geometry["coordinates"]

    if geom_type.startswith("Multi"):
        base_type = geom_type.replace("Multi", "")
        return [
            to_feature({
                "type": base_type,
                "coordinates": [member[0]] if base_type == POLYGON else member,
            })
            for member in coordinates
        ]

    if geom_type == POLYGON:
        return [to_feature({"type": POLYGON, "coordinates": [coordinates[0]]})]

    return [feature]


def simplify_feature(feature: Dict[str, Any], tolerance: float) -> Dict[str, Any]:
    """
    Simplify a decomposed line or polygon feature.

    Points are returned untouched, as is any shape the simplification would
    collapse to nothing.

    Args:
        feature: Decomposed feature
        tolerance: Douglas-Peucker tolerance

    Returns:
        Simplified feature
    """
    if tolerance <= 0 or feature["geometry"]["type"] == POINT:
        return feature

    geom = read_geometry(feature["geometry"])
    simplified = geom.simplify(tolerance, preserve_topology=False)
    if simplified.is_empty or simplified.geom_type != geom.geom_type:
        return feature
    return to_feature(write_geometry(simplified))


def decompose_features(features: List[Dict[str, Any]],
                       simplify_tolerance: float = 0.0) -> List[Dict[str, Any]]:
    """
    Normalize heterogeneous features into single-ring shapes.

    Args:
        features: Input GeoJSON features
        simplify_tolerance: Simplification tolerance, 0 disables it

    Returns:
        Flat list of Point, LineString and hole-free Polygon features
    """
    simple = []
    for feature in features:
        simple.extend(_split_feature(feature))

    simple = [simplify_feature(f, simplify_tolerance) for f in simple]

    logger.debug("Features decomposed", original=len(features), decomposed=len(simple))
    return simple


def feature_ring(feature: Dict[str, Any]) -> np.ndarray:
    """
    Get the coordinates that make up a decomposed feature.

    Point gives a single coordinate, LineString its vertices and Polygon its
    outer ring.

    Returns:
        Array of [x, y] coordinates
    """
    geometry = feature["geometry"]
    geom_type = geometry["type"]

    if geom_type == POINT:
        ring = [geometry["coordinates"]]
    elif geom_type == LINE_STRING:
        ring = geometry["coordinates"]
    elif geom_type == POLYGON:
        ring = geometry["coordinates"][0]
    else:
        raise ValueError(f"Cannot extract a ring from {geom_type} geometry; decompose first")

    return np.array([c[:2] for c in ring], dtype=float).reshape(-1, 2)
