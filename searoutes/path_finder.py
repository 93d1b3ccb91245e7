"""Shortest-path search over a GeoJSON line network."""

import json
import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

import networkx as nx

from .config import DEFAULT_TOLERANCE
from .errors import ConfigurationError, ResourceError
from .geo_utils import haversine
from .interfaces import WeightFunction

logger = logging.getLogger(__name__)

NodeKey = Tuple[int, int]

def _default_weight(a, b, edge_data=None):
    return math.trunc(haversine(a, b))

class PathFinder:
    """Weighted graph built from the LineStrings of a network.
    
    Vertices closer than ``tolerance`` degrees share a node. Edge weights are
    computed once, at construction, by ``weight_fn(a, b, properties)``;
    edges weighted ``inf`` are left out of the graph.
    """
    
    def __init__(self, network: Optional[Dict] = None,
                 weight_fn: Optional[WeightFunction] = None,
                 tolerance: float = DEFAULT_TOLERANCE):
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)) or not tolerance > 0:
            raise ConfigurationError(f"Tolerance must be a positive number, got {tolerance!r}")
        self.tolerance = tolerance
        self.weight_fn = weight_fn or _default_weight
        self.graph = nx.Graph()
        if network is not None:
            self._build_graph(network)

    def _key(self, coord: Sequence[float]) -> NodeKey:
        return round(coord[0] / self.tolerance), round(coord[1] / self.tolerance)

    def _add_vertex(self, coord: Sequence[float]) -> NodeKey:
        key = self._key(coord)
        if key not in self.graph:
            self.graph.add_node(key, coords=[coord[0], coord[1]])
        return key

    def _build_graph(self, network: Dict) -> None:
        excluded = 0
        for feature in network.get('features', []):
            geometry = feature.get('geometry') or {}
            properties = feature.get('properties') or {}
            if geometry.get('type') == 'LineString':
                lines = [geometry['coordinates']]
            elif geometry.get('type') == 'MultiLineString':
                lines = geometry['coordinates']
            else:
                continue

            for line in lines:
                for a, b in zip(line, line[1:]):
                    key_a = self._add_vertex(a)
                    key_b = self._add_vertex(b)
                    if key_a == key_b:
                        continue
                    w = self.weight_fn(a, b, properties)
                    if w is None or math.isinf(w):
                        # Later features replace parallel edges, exclusions included
                        if self.graph.has_edge(key_a, key_b):
                            self.graph.remove_edge(key_a, key_b)
                        excluded += 1
                        continue
                    self.graph.add_edge(key_a, key_b, weight=w)

        logger.debug(f"Built graph with {self.graph.number_of_nodes()} nodes, "
                     f"{self.graph.number_of_edges()} edges ({excluded} edges excluded)")

    def find_path(self, start: Sequence[float], end: Sequence[float]) -> Optional[Dict[str, Any]]:
        """Find the cheapest path between two network vertices.
        
        Args:
            start: Start coordinate (lon, lat)
            end: End coordinate (lon, lat)
            
        Returns:
            Dict with ``path`` (list of coordinates) and ``weight``, or None if
            either point is not a vertex or the points are not connected
        """
        source, target = self._key(start), self._key(end)
        try:
            weight, nodes = nx.single_source_dijkstra(self.graph, source, target, weight='weight')
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None

        path = [list(self.graph.nodes[node]['coords']) for node in nodes]
        return {'path': path, 'weight': weight}

    def save(self, path: str) -> None:
        """Write the built graph to a JSON file."""
        nodes = list(self.graph.nodes)
        position = {node: i for i, node in enumerate(nodes)}
        payload = {
            'tolerance': self.tolerance,
            'nodes': [[*node, *self.graph.nodes[node]['coords']] for node in nodes],
            'edges': [[position[u], position[v], w] for u, v, w in self.graph.edges(data='weight')],
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f)
        logger.info(f"Saved graph with {len(nodes)} nodes to {path}")

    @classmethod
    def load(cls, path: str, weight_fn: Optional[WeightFunction] = None) -> "PathFinder":
        """Load a graph written by :meth:`save`.
        
        Raises:
            ResourceError: If the file is missing or not a saved graph
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
            finder = cls(weight_fn=weight_fn, tolerance=payload['tolerance'])
            keys: List[NodeKey] = []
            for kx, ky, lon, lat in payload['nodes']:
                key = (int(kx), int(ky))
                finder.graph.add_node(key, coords=[lon, lat])
                keys.append(key)
            for i, j, w in payload['edges']:
                finder.graph.add_edge(keys[i], keys[j], weight=w)
        except FileNotFoundError as e:
            logger.error(f"Graph file not found: {path}")
            raise ResourceError(f"Graph file not found: {path}") from e
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, IndexError) as e:
            logger.error(f"Failed to load graph from {path}: {str(e)}")
            raise ResourceError(f"Corrupt graph file {path}: {str(e)}") from e

        logger.info(f"Loaded graph with {finder.graph.number_of_nodes()} nodes from {path}")
        return finder
