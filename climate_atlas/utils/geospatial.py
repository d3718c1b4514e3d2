"""
Lightweight geospatial helpers (no heavy GDAL/PROJ/shapely required).

Geometries are plain GeoJSON-like dicts; positions are [lng, lat(, alt)].
Centroids here are unweighted vertex means, good enough for placing a label
on a country, never for geometric correctness.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

LatLng = Tuple[float, float]


def _ring_vertices(ring: Sequence[Any]) -> Iterator[LatLng]:
    for pos in ring or ():
        if not isinstance(pos, (list, tuple)) or len(pos) < 2:
            continue
        lng, lat = pos[0], pos[1]
        yield (float(lat), float(lng))


def iter_geometry_vertices(geometry: Optional[Dict[str, Any]]) -> Iterator[LatLng]:
    """
    Yield every ring vertex of a geometry as (lat, lng).

    Polygon and MultiPolygon rings are walked directly; GeometryCollection members
    are recursed into. Any other geometry type contributes nothing.
    """
    if not isinstance(geometry, dict):
        return
    gtype = geometry.get("type")
    if gtype == "Polygon":
        for ring in geometry.get("coordinates") or ():
            yield from _ring_vertices(ring)
    elif gtype == "MultiPolygon":
        for polygon in geometry.get("coordinates") or ():
            for ring in polygon or ():
                yield from _ring_vertices(ring)
    elif gtype == "GeometryCollection":
        for part in geometry.get("geometries") or ():
            yield from iter_geometry_vertices(part)


def vertex_centroid(geometry: Optional[Dict[str, Any]]) -> Optional[LatLng]:
    """
    Unweighted arithmetic mean (lat, lng) of all ring vertices.

    Returns None when the geometry has no vertices; callers skip label placement.

    >>> vertex_centroid({"type": "Polygon", "coordinates": [[[0, 0], [0, 2], [2, 2], [2, 0]]]})
    (1.0, 1.0)
    """
    verts: List[LatLng] = list(iter_geometry_vertices(geometry))
    if not verts:
        return None
    lat_sum = sum(lat for lat, _ in verts)
    lng_sum = sum(lng for _, lng in verts)
    n = len(verts)
    return (lat_sum / n, lng_sum / n)
