"""Passage status and vessel class definitions for maritime routing."""

from typing import Dict, Iterator, List

from .errors import ConfigurationError


class PassageStatus:
    """Constants for passage statuses."""
    ALLOWED = "allowed"
    RESTRICTED = "restricted"
    FORBIDDEN = "forbidden"

    ALL = (ALLOWED, RESTRICTED, FORBIDDEN)

    @classmethod
    def validate(cls, status: str, context: str = "status") -> str:
        """Return ``status`` unchanged if it is a known value.

        Raises:
            ConfigurationError: If the value is not one of ``PassageStatus.ALL``
        """
        if status not in cls.ALL:
            raise ConfigurationError(
                f"Invalid {context} '{status}'. Expected one of: {', '.join(cls.ALL)}"
            )
        return status


class VesselClassRegistry:
    """Validated, ordered set of vessel class names.

    Classes are defined by the rule configuration; lookups of a class
    name go through :meth:`require`.
    """

    def __init__(self, classes: Dict[str, str]):
        if not classes:
            raise ConfigurationError("Vessel class list is empty. Add at least one vessel class.")
        self._classes = dict(classes)

    def require(self, name: str) -> str:
        """Return ``name`` if it is registered, otherwise raise."""
        if name not in self._classes:
            raise ConfigurationError(
                f"Unknown vessel class '{name}'. Known classes: {', '.join(self._classes)}"
            )
        return name

    def describe(self, name: str) -> str:
        return self._classes[self.require(name)]

    @property
    def names(self) -> List[str]:
        return list(self._classes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._classes)
