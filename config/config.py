"""Settings shared by every environment module."""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "company_ops"),
}

# Punch-ins after this HH:MM are marked Late
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:30")

LOGIN_EMAIL_DOMAIN = os.getenv("LOGIN_EMAIL_DOMAIN", "adrs.com")

# Seconds to wait for the per-project team lead lock
TEAM_LEAD_LOCK_TIMEOUT = int(os.getenv("TEAM_LEAD_LOCK_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
