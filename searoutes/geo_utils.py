"""Geographic utility functions for maritime routing.

Distances use the haversine formula on a sphere. Networks are triplicated
across three longitude bands so a search can cross the antimeridian as an
ordinary traversal; paths coming out of the search are unwrapped back to
the standard longitude range.
"""

import math
from numbers import Number
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, MultiLineString, mapping

from .config import EARTH_RADIUS_M, WRAP_SHIFTS, WRAP_SHIFT_PROPERTY

def haversine(a: Sequence[float], b: Sequence[float]) -> float:
    """Calculate the great-circle distance between two coordinates.
    
    Args:
        a: First coordinate (lon, lat)
        b: Second coordinate (lon, lat)
        
    Returns:
        Distance in meters
    """
    lon1, lat1 = a[0], a[1]
    lon2, lat2 = b[0], b[1]

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    lat1 = math.radians(lat1)
    lat2 = math.radians(lat2)

    sin_half_lat = math.sin(d_lat * 0.5)
    sin_half_lon = math.sin(d_lon * 0.5)
    s = sin_half_lat * sin_half_lat + math.cos(lat1) * math.cos(lat2) * sin_half_lon * sin_half_lon

    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(s))

def line_length_km(coords: Sequence[Sequence[float]]) -> float:
    """Sum of the haversine lengths of consecutive segments, in kilometers."""
    return sum(haversine(a, b) for a, b in zip(coords, coords[1:])) / 1000

def _shift_coords(coords: Any, dx: float) -> Any:
    # A position is a list of numbers; anything else is a list of positions or rings
    if len(coords) and isinstance(coords[0], Number):
        return [coords[0] + dx, *coords[1:]]
    return [_shift_coords(c, dx) for c in coords]

def shift_geometry(geometry: Optional[Dict], dx: float) -> Optional[Dict]:
    """Return a copy of a GeoJSON geometry with every longitude shifted by ``dx``.
    
    Works for any nesting depth (Point through MultiPolygon) and for
    GeometryCollections.
    """
    if geometry is None:
        return None
    if geometry.get('type') == 'GeometryCollection':
        return {
            'type': 'GeometryCollection',
            'geometries': [shift_geometry(g, dx) for g in geometry.get('geometries', [])],
        }
    return {'type': geometry['type'], 'coordinates': _shift_coords(geometry['coordinates'], dx)}

def triplicate_geojson(fc: Dict) -> Dict:
    """Create three copies of every feature shifted by -360, 0 and +360 degrees.
    
    Args:
        fc: GeoJSON FeatureCollection
        
    Returns:
        New FeatureCollection with ``3 * len(fc['features'])`` features. Each copy
        carries its shift in the ``__wrapShift`` property.
    """
    features = []
    for feature in fc.get('features', []):
        for dx in WRAP_SHIFTS:
            copy = {
                'type': 'Feature',
                'properties': {**(feature.get('properties') or {}), WRAP_SHIFT_PROPERTY: dx},
                'geometry': shift_geometry(feature.get('geometry'), dx),
            }
            if 'id' in feature:
                copy['id'] = feature['id']
            features.append(copy)

    return {'type': 'FeatureCollection', 'features': features}

def unwrap_lon(lon: float) -> float:
    """Map a longitude into (-180, 180]."""
    if -180 < lon <= 180:
        return lon
    x = ((lon + 180) % 360) - 180
    return 180.0 if x == -180 else x

def unwrap_path(path: Sequence[Sequence[float]]) -> List[List[float]]:
    """Normalize the longitudes of a path coming out of the triplicated network."""
    return [[unwrap_lon(coord[0]), coord[1]] for coord in path]

def normalize_pair(a: Sequence[float], b: Sequence[float]) -> Tuple[List[float], List[float]]:
    """Move two points into a shared longitude span when they straddle the antimeridian.
    
    If the longitudes are more than 180 degrees apart, the point with the
    smaller longitude is moved east by 360 degrees. This is a local
    heuristic, not a guarantee of the shortest great-circle span.
    """
    lon_a, lat_a = a[0], a[1]
    lon_b, lat_b = b[0], b[1]

    if abs(lon_a - lon_b) > 180:
        if lon_a < lon_b:
            lon_a += 360
        else:
            lon_b += 360

    return [lon_a, lat_a], [lon_b, lat_b]

def _split_parts(path: Sequence[Sequence[float]]) -> List[List[Tuple[float, float]]]:
    parts = [[tuple(path[0])]]
    for prev, cur in zip(path, path[1:]):
        d_lon = cur[0] - prev[0]
        if abs(d_lon) > 180:
            # Crossing: interpolate the latitude where the segment meets the date line
            boundary = 180.0 if d_lon < 0 else -180.0
            cur_lon = cur[0] + 360 if d_lon < 0 else cur[0] - 360
            t = (boundary - prev[0]) / (cur_lon - prev[0])
            lat = prev[1] + t * (cur[1] - prev[1])
            if parts[-1][-1] != (boundary, lat):
                parts[-1].append((boundary, lat))
            parts.append([(-boundary, lat)])
        if parts[-1][-1] != tuple(cur):
            parts[-1].append(tuple(cur))
    return [part for part in parts if len(part) >= 2]

def split_antimeridian(path: Sequence[Sequence[float]], properties: Optional[Dict] = None) -> Dict:
    """Build a GeoJSON Feature for a path, split where it crosses the antimeridian.
    
    Args:
        path: Coordinates with longitudes already in (-180, 180]
        properties: Properties of the returned Feature
        
    Returns:
        Feature with a LineString geometry, or a MultiLineString if the path
        crosses the date line
    """
    parts = _split_parts(path)
    if not parts:
        geometry = None
    elif len(parts) == 1:
        geometry = mapping(LineString(parts[0]))
    else:
        geometry = mapping(MultiLineString(parts))

    return {'type': 'Feature', 'geometry': geometry, 'properties': dict(properties or {})}

def iter_coordinates(geojson: Optional[Dict]) -> Iterator[List[float]]:
    """Yield every position of a GeoJSON object in document order.
    
    Accepts FeatureCollections, Features, geometries and GeometryCollections.
    Duplicated positions are yielded every time they occur.
    """
    if not geojson:
        return
    kind = geojson.get('type')
    if kind == 'FeatureCollection':
        for feature in geojson.get('features', []):
            yield from iter_coordinates(feature)
    elif kind == 'Feature':
        yield from iter_coordinates(geojson.get('geometry'))
    elif kind == 'GeometryCollection':
        for geometry in geojson.get('geometries', []):
            yield from iter_coordinates(geometry)
    elif 'coordinates' in geojson:
        yield from _iter_positions(geojson['coordinates'])

def _iter_positions(coords: Any) -> Iterator[List[float]]:
    if len(coords) and isinstance(coords[0], Number):
        yield list(coords)
        return
    for c in coords:
        yield from _iter_positions(c)
