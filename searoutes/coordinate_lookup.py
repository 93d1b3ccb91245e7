"""Nearest-vertex lookup over a shipping-lane network."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from rtree import index

from .errors import ResourceError
from .geo_utils import iter_coordinates
from .preprocessing import parse_coordinates

logger = logging.getLogger(__name__)

class CoordinateLookup:
    """Spatial index over every vertex of a network, used to snap query points."""
    
    def __init__(self, network: Optional[Dict] = None):
        """Initialize the lookup, building the index if a network is given."""
        self.vertices: Optional[List[List[float]]] = None
        self.index: Optional[index.Index] = None
        if network is not None:
            self.build_index(network)

    @property
    def is_built(self) -> bool:
        return self.vertices is not None

    def build_index(self, network: Dict) -> Tuple[List[List[float]], Optional[index.Index]]:
        """Build the spatial index from a GeoJSON network.
        
        Args:
            network: GeoJSON FeatureCollection
            
        Returns:
            Tuple of (vertices, index). The index is None for an empty network.
        """
        logger.debug("Building spatial coordinate index")
        
        self.vertices = [coords[:2] for coords in iter_coordinates(network)]
        self.index = None

        if not self.vertices:
            logger.debug("Empty network provided - no vertices to index")
            return self.vertices, self.index

        # Bulk-load from a generator of (id, bounds, obj) entries
        self.index = index.Index(
            (i, (v[0], v[1], v[0], v[1]), None) for i, v in enumerate(self.vertices)
        )

        logger.debug(f"Indexed {len(self.vertices)} coordinate vertices")
        return self.vertices, self.index

    def get_vertex(self, vertex_index: Any) -> Optional[List[float]]:
        """Get vertex coordinates by index, or None if the index is not valid."""
        if self.vertices is None or isinstance(vertex_index, bool) or not isinstance(vertex_index, int):
            return None
        if not 0 <= vertex_index < len(self.vertices):
            return None
        return self.vertices[vertex_index]

    def snap_to_nearest_vertex(self, point: Any) -> Optional[Dict]:
        """Snap a point to the nearest vertex of the network.
        
        Args:
            point: Coordinate pair, GeoJSON point or shapely Point
            
        Returns:
            The nearest vertex as a GeoJSON Point feature, or None if the point
            is malformed or the network has no vertices
            
        Raises:
            ResourceError: If the index has not been built yet
        """
        if not self.is_built:
            raise ResourceError("Coordinate index has not been built")

        parsed = parse_coordinates(point)
        if not parsed.is_valid:
            logger.debug(f"Cannot snap point {point!r}: {parsed.error_message}")
            return None

        if self.index is None:
            return None

        lon, lat = parsed.coords
        nearest = next(iter(self.index.nearest((lon, lat, lon, lat), 1)), None)
        vertex = self.get_vertex(nearest)
        if vertex is None:
            return None

        return {
            'type': 'Feature',
            'properties': {},
            'geometry': {'type': 'Point', 'coordinates': list(vertex)},
        }
