"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_LIFETIME_SECONDS = 8 * 60 * 60
TOKEN_ALGORITHM = "HS256"
PIN_HASH_METHOD = "pbkdf2:sha256:600000"
RECORD_ID_PREFIX = "rec"
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 200
UNKNOWN_STAFF_NAME = "Unknown User"
UNASSIGNED_PROJECT_NAME = "Unassigned"
