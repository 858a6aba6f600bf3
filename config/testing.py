import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db_test"),
}

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
ANNUAL_LEAVE_ALLOWANCE = 20
SERIALIZE_LEAVE_WRITES = True
CHECK_BALANCE_ON_APPROVE = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
