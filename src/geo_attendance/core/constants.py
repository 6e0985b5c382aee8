"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_GRACE_MINUTES = 5
DEFAULT_GEOFENCE_RADIUS_METERS = 150.0
DEFAULT_TIMEZONE = "UTC"

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0
DEFAULT_PATTERN_LOOKBACK_DAYS = 30

# Pattern detection thresholds
LATE_STREAK_LENGTH = 2
CHRONIC_LATE_RATIO = 0.40
CHRONIC_MIN_SHIFTS = 3
DAY_SPECIFIC_MIN_LATES = 2
