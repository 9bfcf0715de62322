"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_TOKEN_MINUTES = 60 * 24
DEFAULT_EMPLOYEE_PASSWORD = "password"
EMPLOYEE_ID_PREFIX = "EMP"
MAX_WEEKLY_HOURS = 40
MAX_UPLOAD_BYTES = 30 * 1024 * 1024
MAX_FEEDBACK_TOPIC_LENGTH = 1000
MAX_FEEDBACK_LENGTH = 2000
