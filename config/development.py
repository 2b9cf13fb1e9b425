import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "vacation_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Cycles starting before this date are not shown (YYYY-MM-DD or dd/mm/yyyy)
VACATION_FLOOR_DATE = os.getenv("VACATION_FLOOR_DATE", "2025-01-01")
# Safety valve for cycle generation; not a business rule
VACATION_MAX_CYCLE_ITERATIONS = int(os.getenv("VACATION_MAX_CYCLE_ITERATIONS", "50"))

# Upgrade legacy single-leave schedules on startup (idempotent)
MIGRATE_LEGACY_SCHEDULES = bool(int(os.getenv("MIGRATE_LEGACY_SCHEDULES", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
