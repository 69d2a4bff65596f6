"""
Field polygon helpers.

Polygons are ordered sequences of GeoLocation vertices. All helpers assume
at least 3 vertices.
"""
from typing import Any, Dict, List, Sequence
import numpy as np
from shapely.geometry import Polygon, mapping

from app.domain.models import GeoLocation


def ensure_closed_polygon(vertices: Sequence[GeoLocation]) -> List[GeoLocation]:
    """
    Return a closed copy of a polygon ring.

    Args:
        vertices: Polygon vertices, open or closed

    Returns:
        New list whose last vertex equals the first
    """
    closed = list(vertices)
    first, last = closed[0], closed[-1]
    if first.lat != last.lat or first.lng != last.lng:
        closed.append(GeoLocation(lat=first.lat, lng=first.lng))
    return closed


def centroid(vertices: Sequence[GeoLocation]) -> GeoLocation:
    """
    Arithmetic mean of the vertex coordinates.

    Pass the original (non-closed) ring so the first vertex is not
    counted twice.

    Args:
        vertices: Polygon vertices

    Returns:
        Mean location
    """
    if not vertices:
        raise ValueError("Cannot compute the centroid of an empty polygon")
    coords = np.array([(v.lat, v.lng) for v in vertices], dtype=float)
    lat, lng = coords.mean(axis=0)
    return GeoLocation(lat=float(lat), lng=float(lng))


def to_geojson_polygon(vertices: Sequence[GeoLocation]) -> Dict[str, Any]:
    """
    Build a GeoJSON Polygon geometry with a closed [lng, lat] ring.

    Args:
        vertices: Polygon vertices, open or closed

    Returns:
        GeoJSON geometry dictionary
    """
    ring = [(v.lng, v.lat) for v in ensure_closed_polygon(vertices)]
    geometry = mapping(Polygon(ring))
    return {
        "type": geometry["type"],
        "coordinates": [[list(coord) for coord in geometry["coordinates"][0]]],
    }
