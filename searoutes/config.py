"""Configuration constants for maritime routing."""

# Geodesy
EARTH_RADIUS_M = 6371000  # mean Earth radius used by the haversine formula
KM_TO_NM = 0.539957
METERS_PER_KILOMETER = 1000

# Antimeridian handling
WRAP_SHIFTS = (-360, 0, 360)
WRAP_SHIFT_PROPERTY = '__wrapShift'

# Path finding parameters
DEFAULT_TOLERANCE = 3e-4  # degrees, vertices closer than this are merged
DEFAULT_RESTRICTED_MULTIPLIER = 1.25
DEFAULT_PROFILE = 'default'

# Bundled networks
DEFAULT_NETWORK = 'eurostat'
ALLOWED_NETWORKS = ('eurostat', 'ornl')
DATA_DIR_ENV = 'SEAROUTES_DATA_DIR'
