import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db"),
}

# "mysql" or "memory" (process-local, nothing persisted)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# Flat annual leave allowance, in days, for every employee
ANNUAL_LEAVE_ALLOWANCE = int(os.getenv("ANNUAL_LEAVE_ALLOWANCE", "20"))

# Serialize submit/approve/reject per employee; 0 restores plain read-then-write
SERIALIZE_LEAVE_WRITES = bool(int(os.getenv("SERIALIZE_LEAVE_WRITES", "1")))
CHECK_BALANCE_ON_APPROVE = bool(int(os.getenv("CHECK_BALANCE_ON_APPROVE", "0")))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
