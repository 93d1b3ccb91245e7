"""Exceptions raised by the maritime routing package."""


class SeaRouteError(Exception):
    """Base class for all routing errors."""


class ConfigurationError(SeaRouteError, ValueError):
    """Invalid rule set, vessel class, profile or network name."""


class InputError(SeaRouteError, ValueError):
    """Malformed coordinate or a point that cannot be snapped to the network."""


class ResourceError(SeaRouteError, RuntimeError):
    """A required artifact is missing, corrupt or not built yet."""
