"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SHORT_TOKEN_EXPIRY_SECONDS = 900
LONG_TOKEN_EXPIRY_SECONDS = 604800
TOKEN_ALGORITHM = "HS256"

MIN_PASSWORD_LENGTH = 6
DEPARTMENT_NAME_MIN_LENGTH = 2
DEPARTMENT_NAME_MAX_LENGTH = 100
MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7

CONTRACT_ACTIVE = "Active"
CONTRACT_MISSING = "No Contract"
