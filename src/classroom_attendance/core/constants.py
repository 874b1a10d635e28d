"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_TTL_HOURS = 8
DEFAULT_SESSION_SWEEP_MINUTES = 60

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6

AUTH_HEADER = "X-Auth-Token"
AUTH_QUERY_PARAM = "token"

GENERIC_STORE_MESSAGE = "Database error"
