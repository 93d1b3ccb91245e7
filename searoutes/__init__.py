"""Maritime routing package."""

from .interfaces import (ClassRules, EffectivePassage, MaritimeProfiles, Passage,
                         PassageRuleConfig, RouterOptions)
from .errors import ConfigurationError, InputError, ResourceError, SeaRouteError
from .passage_types import PassageStatus, VesselClassRegistry
from .coordinate_lookup import CoordinateLookup
from .path_finder import PathFinder
from .data_loader import load_default_network, load_network, load_profiles
from .geo_utils import haversine, normalize_pair, triplicate_geojson, unwrap_path
from .profiles import collect_class_edge_rules, compute_effective_status, make_weight_fn
from .route_finder import RouterState, SeaRouter

__version__ = '1.0.0'

__all__ = [
    'ClassRules', 'EffectivePassage', 'MaritimeProfiles', 'Passage', 'PassageRuleConfig',
    'RouterOptions', 'ConfigurationError', 'InputError', 'ResourceError', 'SeaRouteError',
    'PassageStatus', 'VesselClassRegistry', 'CoordinateLookup', 'PathFinder',
    'load_default_network', 'load_network', 'load_profiles',
    'haversine', 'normalize_pair', 'triplicate_geojson', 'unwrap_path',
    'collect_class_edge_rules', 'compute_effective_status', 'make_weight_fn',
    'RouterState', 'SeaRouter',
]
