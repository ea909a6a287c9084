"""Constants used throughout the application."""

# ICE factor bounds
MIN_FACTOR = 1
MAX_FACTOR = 5
DEFAULT_FACTOR = 3

# Highest achievable ICE score for an open task
MAX_ICE_SCORE = MAX_FACTOR ** 3

# Roster seeded into a brand-new store
DEFAULT_PEOPLE = ("Alice", "Bob", "Charlie")

# Assignee filter keywords
ASSIGNEE_ALL = "all"
ASSIGNEE_UNASSIGNED = "unassigned"

STORE_FORMAT_VERSION = "1"
EXPORT_FILENAME_PREFIX = "team-inbox"
