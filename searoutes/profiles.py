"""Vessel-class passage rules and the weight functions derived from them."""

import logging
import math
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Set

from .errors import ConfigurationError
from .interfaces import ClassRules, EffectivePassage, PassageRuleConfig, WeightFunction
from .passage_types import PassageStatus, VesselClassRegistry

logger = logging.getLogger(__name__)

def normalize_fid(fid: Any) -> Optional[float]:
    """Normalize a feature id to a finite number, or None if it has none."""
    if fid is None or isinstance(fid, bool):
        return None
    try:
        n = float(fid)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(n):
        return None
    return int(n) if n.is_integer() else n

def compute_effective_status(config: PassageRuleConfig,
                             classes: Iterable[str]) -> Mapping[str, EffectivePassage]:
    """Resolve the status of every passage for every vessel class.
    
    A class without an explicit status on a passage gets the configuration's
    ``default_policy``. Overrides are not evaluated.
    
    Args:
        config: Passage rule configuration
        classes: Vessel class names
        
    Returns:
        Read-only mapping of passage id to its resolved status, in declaration order
    """
    classes = list(classes)
    effective = {}
    for passage_id, passage in config.passages.items():
        status = {clazz: passage.status.get(clazz) or config.default_policy for clazz in classes}
        effective[passage_id] = EffectivePassage(
            status=MappingProxyType(status),
            feature_ids=tuple(passage.feature_ids),
        )
    if config.overrides:
        logger.debug(f"Ignoring {len(config.overrides)} rule overrides")
    return MappingProxyType(effective)

def collect_class_edge_rules(effective: Mapping[str, EffectivePassage],
                             classes: Iterable[str]) -> Dict[str, ClassRules]:
    """Collect the forbidden and restricted feature ids of every vessel class.
    
    Passages are scanned in declaration order. When two passages list the same
    feature id with different statuses for a class, the later passage wins;
    an ``allowed`` passage leaves earlier membership untouched.
    """
    classes = list(classes)
    forbidden: Dict[str, Set[Any]] = {clazz: set() for clazz in classes}
    restricted: Dict[str, Set[Any]] = {clazz: set() for clazz in classes}

    for passage in effective.values():
        if not passage.feature_ids:
            continue
        ids = [fid for fid in map(normalize_fid, passage.feature_ids) if fid is not None]

        for clazz in classes:
            status = passage.status[clazz]
            if status == PassageStatus.FORBIDDEN:
                forbidden[clazz].update(ids)
                restricted[clazz].difference_update(ids)
            elif status == PassageStatus.RESTRICTED:
                restricted[clazz].update(ids)
                forbidden[clazz].difference_update(ids)

    return {
        clazz: ClassRules(forbidden=frozenset(forbidden[clazz]), restricted=frozenset(restricted[clazz]))
        for clazz in classes
    }

def make_weight_fn(clazz: str,
                   rules: Mapping[str, ClassRules],
                   restricted_multiplier: float,
                   distance_fn: Callable[[Sequence[float], Sequence[float]], float]) -> WeightFunction:
    """Create the edge weight function of one vessel class.
    
    The returned function takes ``(a, b, edge_data)``; ``edge_data['fid']`` is
    the id of the network feature the edge belongs to.
    
    Returns:
        ``inf`` for forbidden edges, the truncated distance times
        ``restricted_multiplier`` for restricted edges, the truncated distance otherwise
        
    Raises:
        ConfigurationError: If ``clazz`` has no rules
    """
    if clazz not in rules:
        raise ConfigurationError(
            f"Unknown vessel class '{clazz}'. Known classes: {', '.join(rules)}"
        )
    forbidden = rules[clazz].forbidden
    restricted = rules[clazz].restricted

    def weight(a, b, edge_data=None):
        base = math.trunc(distance_fn(a, b))
        fid = normalize_fid((edge_data or {}).get('fid'))
        if fid is not None:
            if fid in forbidden:
                return math.inf
            if fid in restricted:
                return base * restricted_multiplier
        return base

    return weight

def build_class_weights(config: PassageRuleConfig,
                        restricted_multiplier: float,
                        distance_fn: Callable[[Sequence[float], Sequence[float]], float]):
    """Build effective status, rules and one weight function per vessel class.
    
    Returns:
        Tuple of (weights, rules, effective_status)
        
    Raises:
        ConfigurationError: If the configuration declares no vessel classes
    """
    registry = VesselClassRegistry(config.classes)
    effective = compute_effective_status(config, registry)
    rules = collect_class_edge_rules(effective, registry)
    weights = {
        clazz: make_weight_fn(clazz, rules, restricted_multiplier, distance_fn)
        for clazz in registry
    }
    logger.debug(f"Built weight functions for classes: {', '.join(registry.names)}")
    return weights, rules, effective
