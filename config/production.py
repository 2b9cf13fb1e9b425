import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "vacation_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

VACATION_FLOOR_DATE = os.getenv("VACATION_FLOOR_DATE", "2025-01-01")
VACATION_MAX_CYCLE_ITERATIONS = int(os.getenv("VACATION_MAX_CYCLE_ITERATIONS", "50"))

MIGRATE_LEGACY_SCHEDULES = bool(int(os.getenv("MIGRATE_LEGACY_SCHEDULES", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
