"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

UNASSIGNED_PROJECT = "Unassigned"
MEMBER_ROLE_LABEL = "Member"

DEFAULT_LATE_CUTOFF = time(9, 30)
DEFAULT_LOGIN_EMAIL_DOMAIN = "adrs.com"
DEFAULT_TEAM_LEAD_LOCK_TIMEOUT = 10
DEFAULT_LIST_LIMIT = 200

MINUTES_PER_DAY = 24 * 60

DAILY_LOG_LIST_LIMIT = 500
MIN_TASK_RATING = 1
MAX_TASK_RATING = 5
