import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "vacation_db_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

VACATION_FLOOR_DATE = "2025-01-01"
VACATION_MAX_CYCLE_ITERATIONS = 50

MIGRATE_LEGACY_SCHEDULES = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
