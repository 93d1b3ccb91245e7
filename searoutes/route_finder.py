"""Route finding functionality for maritime routing."""

import logging
import math
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

from .config import DEFAULT_NETWORK, DEFAULT_PROFILE, KM_TO_NM, METERS_PER_KILOMETER
from .coordinate_lookup import CoordinateLookup
from .data_loader import load_default_network
from .errors import ConfigurationError, InputError, ResourceError, SeaRouteError
from .geo_utils import (haversine, line_length_km, normalize_pair, split_antimeridian,
                        triplicate_geojson, unwrap_lon, unwrap_path)
from .interfaces import MaritimeProfiles, PassageRuleConfig, RouterOptions
from .path_finder import PathFinder
from .preprocessing import parse_coordinates
from .profiles import build_class_weights

logger = logging.getLogger(__name__)

class RouterState:
    """Construction stages of a router, in order."""
    UNINITIALIZED = "uninitialized"
    INDEX_BUILT = "index_built"
    NETWORK_TRIPLICATED = "network_triplicated"
    PROFILES_BUILT = "profiles_built"
    READY = "ready"

@contextmanager
def log_timing(label: str):
    """Log how long the wrapped block took, at debug level."""
    start = time.perf_counter()
    yield
    logger.debug(f"{label}: {(time.perf_counter() - start) * 1000:.1f} ms")

def _raw_distance_weight(a, b, edge_data=None):
    return math.trunc(haversine(a, b))

def _feature_length_km(geometry: Optional[Dict]) -> float:
    if not geometry:
        return 0.0
    if geometry.get('type') == 'LineString':
        return line_length_km(geometry['coordinates'])
    if geometry.get('type') == 'MultiLineString':
        return sum(line_length_km(line) for line in geometry['coordinates'])
    return 0.0

class SeaRouter:
    """Shortest sea routes over a shipping-lane network, per vessel class.
    
    Construction builds, in order, the coordinate index, the triplicated
    network and one path finder per profile: ``default`` (plain distance)
    and one per vessel class of the passage rules. Nothing is mutated once
    the router is ready, so queries may run concurrently.
    """
    
    def __init__(self,
                 network: Optional[Dict] = None,
                 maritime_profiles: Optional[Union[PassageRuleConfig, Dict]] = None,
                 options: Optional[RouterOptions] = None,
                 default_network: str = DEFAULT_NETWORK,
                 data_dir: Optional[str] = None):
        """Build a router.
        
        Args:
            network: GeoJSON FeatureCollection of shipping lanes. If None, the
                bundled ``default_network`` is loaded from ``data_dir``.
            maritime_profiles: Passage rules; without them only ``default`` exists
            options: Router options, defaults to ``RouterOptions()``
            default_network: Name of the bundled network (``eurostat`` or ``ornl``)
            data_dir: Directory holding ``networks/<name>.geojson``
            
        Raises:
            ConfigurationError: If the rules or the network name are invalid
            ResourceError: If the bundled network cannot be loaded
        """
        self.options = options or RouterOptions()
        if self.options.enable_logging:
            logging.getLogger('searoutes').setLevel(logging.DEBUG)

        self.state = RouterState.UNINITIALIZED
        self.coordinate_lookup: Optional[CoordinateLookup] = None
        self.tripled: Optional[Dict] = None
        self.path_finders: Dict[str, PathFinder] = {}
        self.profiles: Optional[MaritimeProfiles] = None

        try:
            self.network = network if network is not None else load_default_network(default_network, data_dir)
            if isinstance(maritime_profiles, dict):
                maritime_profiles = PassageRuleConfig.from_dict(maritime_profiles)
            self.maritime_profiles = maritime_profiles
            self._init()
        except SeaRouteError as e:
            logger.error(f"Failed to initialize SeaRouter: {str(e)}")
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to initialize SeaRouter: {str(e)}")
            raise ConfigurationError(f"Failed to initialize SeaRouter: {e}") from e

    def _init(self) -> None:
        self._build_network_infrastructure()
        self._create_default_path_finder()
        if self.maritime_profiles is not None:
            self._create_maritime_path_finders()
        self.state = RouterState.PROFILES_BUILT

        self.state = RouterState.READY
        logger.info(f"SeaRouter ready with profiles: {', '.join(self.available_profiles)}")

    def _build_network_infrastructure(self) -> None:
        logger.debug("Building network infrastructure")

        with log_timing("Coordinate indexing"):
            self.coordinate_lookup = CoordinateLookup(self.network)
        self.state = RouterState.INDEX_BUILT

        with log_timing("Triplicating network"):
            self.tripled = triplicate_geojson(self.network)
            for i, feature in enumerate(self.tripled['features'], start=1):
                feature['properties']['_cost'] = _feature_length_km(feature['geometry'])
                feature['properties']['_id'] = i
        self.state = RouterState.NETWORK_TRIPLICATED

    def _create_default_path_finder(self) -> None:
        with log_timing("Default path finder"):
            self.path_finders[DEFAULT_PROFILE] = PathFinder(
                self.tripled, weight_fn=_raw_distance_weight, tolerance=self.options.tolerance
            )

    def _create_maritime_path_finders(self) -> None:
        with log_timing("Maritime path finders"):
            self.profiles = self.build_maritime_path_finders(self.maritime_profiles, self.tripled)
        self.path_finders.update(self.profiles.path_finders)
        logger.debug(f"Maritime profiles available: {', '.join(self.maritime_profile_names)}")

    def build_maritime_path_finders(self,
                                    config: PassageRuleConfig,
                                    network: Dict,
                                    triplicate: bool = False) -> MaritimeProfiles:
        """Build one path finder per vessel class of ``config`` over ``network``.
        
        Args:
            config: Passage rules with at least one vessel class
            network: Network to route on
            triplicate: Triplicate ``network`` first
            
        Returns:
            The path finders with the weights, rules and effective status behind them
            
        Raises:
            ConfigurationError: If the rules have no vessel class or use a reserved name
        """
        if DEFAULT_PROFILE in config.classes:
            raise ConfigurationError(f"Vessel class name '{DEFAULT_PROFILE}' is reserved")

        weights, rules, effective = build_class_weights(
            config, self.options.restricted_multiplier, haversine
        )
        graph = triplicate_geojson(network) if triplicate else network

        path_finders = {
            clazz: PathFinder(graph, weight_fn=weight, tolerance=self.options.tolerance)
            for clazz, weight in weights.items()
        }
        return MaritimeProfiles(
            path_finders=path_finders,
            weights=weights,
            rules=rules,
            effective_status=effective,
        )

    @property
    def available_profiles(self) -> List[str]:
        return list(self.path_finders)

    @property
    def maritime_profile_names(self) -> List[str]:
        return [name for name in self.path_finders if name != DEFAULT_PROFILE]

    def has_profile(self, profile: str) -> bool:
        return profile in self.path_finders

    def get_path_finder(self, profile: str = DEFAULT_PROFILE) -> PathFinder:
        """Get the path finder of a profile.
        
        Raises:
            ConfigurationError: If the profile does not exist
        """
        if profile not in self.path_finders:
            raise ConfigurationError(
                f"Profile '{profile}' not found. Available profiles: {', '.join(self.path_finders)}"
            )
        return self.path_finders[profile]

    def _require_ready(self) -> None:
        if self.state != RouterState.READY:
            raise ResourceError(f"SeaRouter is not ready (state: {self.state})")

    def get_shortest_path(self, start_point: Any, end_point: Any,
                          profile: str = DEFAULT_PROFILE, path: bool = False) -> Optional[Dict]:
        """Get the shortest path between two network vertices.
        
        Args:
            start_point: Start as coordinate pair, GeoJSON point or shapely Point
            end_point: End as coordinate pair, GeoJSON point or shapely Point
            profile: Profile to route with
            path: Return the route geometry instead of the two end points
            
        Returns:
            GeoJSON Feature with ``profile``, ``weight`` (m), ``distance`` (km) and
            ``distanceNM`` properties, or None if no path exists
            
        Raises:
            InputError: If a point is malformed
            ConfigurationError: If the profile does not exist
        """
        self._require_ready()
        start = parse_coordinates(start_point)
        end = parse_coordinates(end_point)
        for parsed in (start, end):
            if not parsed.is_valid:
                raise InputError(parsed.error_message)

        a, b = normalize_pair(start.coords, end.coords)
        path_finder = self.get_path_finder(profile)

        with log_timing("Find path"):
            result = path_finder.find_path(a, b)
        if result is None:
            logger.debug(f"No path found between {a} and {b} for profile '{profile}'")
            return None

        distance_km = result['weight'] / METERS_PER_KILOMETER
        properties = {
            'profile': profile,
            'weight': result['weight'],
            'distance': distance_km,
            'distanceNM': round(distance_km * KM_TO_NM, 2),
        }

        if path:
            unwrapped = unwrap_path(result['path'])
            if len(unwrapped) < 2:
                return {'type': 'Feature', 'geometry': None, 'properties': properties}
            return split_antimeridian(unwrapped, properties)

        return {
            'type': 'Feature',
            'geometry': {
                'type': 'MultiPoint',
                'coordinates': [[unwrap_lon(a[0]), a[1]], [unwrap_lon(b[0]), b[1]]],
            },
            'properties': properties,
        }

    def get_shortest_route(self, start_point: Any, end_point: Any,
                           profile: str = DEFAULT_PROFILE, path: bool = False) -> Optional[Dict]:
        """Get the shortest route between two arbitrary points.
        
        Both points are first snapped to their nearest network vertex; the
        result has the same shape as :meth:`get_shortest_path`.
        
        Raises:
            InputError: If a point cannot be snapped to the network
        """
        self._require_ready()
        with log_timing("Snapping points to network"):
            start = self.coordinate_lookup.snap_to_nearest_vertex(start_point)
            end = self.coordinate_lookup.snap_to_nearest_vertex(end_point)

        if start is None or end is None:
            raise InputError("Unable to snap points to network")

        return self.get_shortest_path(start, end, profile=profile, path=path)
