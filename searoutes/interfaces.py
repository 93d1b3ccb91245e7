"""Type definitions and interfaces for maritime routing."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .config import DEFAULT_RESTRICTED_MULTIPLIER, DEFAULT_TOLERANCE
from .errors import ConfigurationError
from .passage_types import PassageStatus

Coordinate = Tuple[float, float]
WeightFunction = Callable[[Sequence[float], Sequence[float], Optional[Mapping[str, Any]]], float]


@dataclass
class RouterOptions:
    """Options for building a router."""
    tolerance: float = DEFAULT_TOLERANCE
    restricted_multiplier: float = DEFAULT_RESTRICTED_MULTIPLIER
    enable_logging: bool = False


@dataclass
class Passage:
    """A chokepoint (canal, strait or designated route) mapped to network features."""
    passage_id: str
    status: Dict[str, str] = field(default_factory=dict)
    feature_ids: List[int] = field(default_factory=list)
    kind: Optional[str] = None
    risk_group: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, passage_id: str, data: Dict[str, Any]) -> "Passage":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Passage '{passage_id}' must be an object")

        status = data.get('status') or {}
        if not isinstance(status, dict):
            raise ConfigurationError(f"Passage '{passage_id}' status must map class names to statuses")
        for clazz, value in status.items():
            PassageStatus.validate(value, f"status for class '{clazz}' in passage '{passage_id}'")

        feature_ids = data.get('feature_ids') or []
        if not isinstance(feature_ids, list):
            raise ConfigurationError(f"Passage '{passage_id}' feature_ids must be a list")

        return cls(
            passage_id=passage_id,
            status=dict(status),
            feature_ids=list(feature_ids),
            kind=data.get('kind'),
            risk_group=list(data.get('risk_group') or []),
            notes=data.get('notes'),
        )


@dataclass
class PassageRuleConfig:
    """Passage rules for all vessel classes.

    ``overrides`` is kept verbatim for forward compatibility; the rule
    engine never evaluates it.
    """
    default_policy: str = PassageStatus.ALLOWED
    classes: Dict[str, str] = field(default_factory=dict)
    passages: Dict[str, Passage] = field(default_factory=dict)
    version: Optional[str] = None
    risk_groups: Dict[str, Any] = field(default_factory=dict)
    overrides: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassageRuleConfig":
        """Build a rule configuration from its JSON representation.

        Args:
            data: Parsed JSON object with ``default_policy``, ``classes`` and ``passages``

        Returns:
            The validated configuration, passages in declaration order
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Passage rule configuration must be an object")

        default_policy = PassageStatus.validate(
            data.get('default_policy', PassageStatus.ALLOWED), "default_policy"
        )

        classes = data.get('classes') or {}
        if isinstance(classes, list):
            classes = {name: "" for name in classes}
        if not isinstance(classes, dict):
            raise ConfigurationError("classes must map vessel class names to descriptions")

        passages = data.get('passages') or {}
        if not isinstance(passages, dict):
            raise ConfigurationError("passages must map passage ids to passage definitions")

        return cls(
            default_policy=default_policy,
            classes=dict(classes),
            passages={pid: Passage.from_dict(pid, p) for pid, p in passages.items()},
            version=data.get('version'),
            risk_groups=dict(data.get('risk_groups') or {}),
            overrides=list(data.get('overrides') or []),
        )

    @property
    def class_names(self) -> List[str]:
        return list(self.classes)


@dataclass(frozen=True)
class EffectivePassage:
    """Resolved status of one passage for every vessel class."""
    status: Mapping[str, str]
    feature_ids: Tuple[int, ...]


@dataclass(frozen=True)
class ClassRules:
    """Feature ids a single vessel class may not use or must pay extra for."""
    forbidden: FrozenSet[int] = frozenset()
    restricted: FrozenSet[int] = frozenset()


@dataclass
class MaritimeProfiles:
    """Everything built for the vessel-class profiles of a router."""
    path_finders: Dict[str, Any]
    weights: Dict[str, WeightFunction]
    rules: Dict[str, ClassRules]
    effective_status: Mapping[str, EffectivePassage]
