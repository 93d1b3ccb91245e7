"""Input preprocessing utilities for maritime routing."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from shapely.geometry import Point

logger = logging.getLogger(__name__)

@dataclass
class ParsedCoordinate:
    """Represents a parsed coordinate with validation status."""
    longitude: float
    latitude: float
    is_valid: bool
    error_message: Optional[str] = None

    @property
    def coords(self) -> Tuple[float, float]:
        return self.longitude, self.latitude

def parse_coordinates(point: Any) -> ParsedCoordinate:
    """Extract a (lon, lat) pair from the supported point representations.

    Supports:
    - Coordinate sequences: [lon, lat] or (lon, lat), extra items ignored
    - GeoJSON Point features: {"geometry": {"coordinates": [lon, lat]}}
    - GeoJSON Point geometries: {"type": "Point", "coordinates": [lon, lat]}
    - shapely Points
    """
    if point is None:
        return ParsedCoordinate(0, 0, False, "No point given")

    if isinstance(point, Point):
        if point.is_empty:
            return ParsedCoordinate(0, 0, False, "Empty point")
        return validate_coordinates(point.x, point.y)

    coords = point
    if isinstance(point, dict):
        geometry = point.get('geometry') if 'geometry' in point else point
        coords = geometry.get('coordinates') if isinstance(geometry, dict) else None

    if isinstance(coords, (str, bytes)) or not hasattr(coords, '__getitem__'):
        return ParsedCoordinate(0, 0, False, "Invalid coordinate format")

    try:
        if len(coords) < 2:
            return ParsedCoordinate(0, 0, False, "A coordinate needs a longitude and a latitude")
        lon, lat = float(coords[0]), float(coords[1])
    except (TypeError, ValueError) as e:
        return ParsedCoordinate(0, 0, False, f"Error parsing coordinates: {str(e)}")

    return validate_coordinates(lon, lat)

def validate_coordinates(lon: float, lat: float) -> ParsedCoordinate:
    """Validate that coordinates are finite and the latitude is in range.

    Longitudes outside [-180, 180] are accepted, they are a valid
    intermediate form while routing across the antimeridian.
    """
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return ParsedCoordinate(lon, lat, False, "Coordinates must be finite numbers")
    if not (-90 <= lat <= 90):
        return ParsedCoordinate(lon, lat, False, "Latitude must be between -90 and 90")
    return ParsedCoordinate(lon, lat, True)
