"""GeoJSON encode/decode helpers built on shapely."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry


def read_geometry(geometry: Dict[str, Any]) -> BaseGeometry:
    """Parse a GeoJSON geometry dict into a shapely geometry."""
    return shape(geometry)


def _listify(value):
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value


def write_geometry(geom: BaseGeometry) -> Dict[str, Any]:
    """Serialize a shapely geometry to a GeoJSON geometry dict with list coordinates."""
    data = mapping(geom)
    return {"type": data["type"], "coordinates": _listify(data["coordinates"])}


def to_feature(geometry: Union[BaseGeometry, Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap a geometry in a property-less GeoJSON Feature."""
    if isinstance(geometry, BaseGeometry):
        geometry = write_geometry(geometry)
    return {"type": "Feature", "geometry": geometry}


def load_features(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load features from a GeoJSON file.

    Accepts a FeatureCollection, a single Feature, a bare geometry or a JSON
    list of features.

    Args:
        path: File to read

    Returns:
        List of Feature dicts
    """
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, list):
        return data
    if data.get("type") == "FeatureCollection":
        return list(data["features"])
    if data.get("type") == "Feature":
        return [data]
    return [to_feature(data)]


def dump_features(features: List[Dict[str, Any]], path: Union[str, Path]) -> None:
    """Write features to a GeoJSON FeatureCollection file."""
    with open(path, "w") as f:
        json.dump({"type": "FeatureCollection", "features": features}, f)
