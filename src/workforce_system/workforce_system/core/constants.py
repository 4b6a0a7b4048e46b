"""Defaults for paging, site working hours, fingerprint matching and payroll."""

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

DEFAULT_WORKING_HOURS_START = "08:00"
DEFAULT_WORKING_HOURS_END = "17:00"
DEFAULT_STANDARD_HOURS = 8.0
DEFAULT_OVERTIME_MULTIPLIER = 1.5

# Check-out before the site's end with less than this share of a standard day
# counts as an early departure.
EARLY_DEPARTURE_RATIO = 0.5

DEFAULT_MATCH_THRESHOLD = 80
MIN_SCAN_QUALITY = 60
NO_MATCH_SCORE = 50
SCAN_QUALITY_RANGE = (70, 100)
SCORE_JITTER_RANGE = (0.8, 1.2)

RECENT_TEMPLATE_LOGS = 5

DEFAULT_PROCESSED_BY = "SYSTEM"
