import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db"),
}

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
ANNUAL_LEAVE_ALLOWANCE = int(os.getenv("ANNUAL_LEAVE_ALLOWANCE", "20"))
SERIALIZE_LEAVE_WRITES = bool(int(os.getenv("SERIALIZE_LEAVE_WRITES", "1")))
CHECK_BALANCE_ON_APPROVE = bool(int(os.getenv("CHECK_BALANCE_ON_APPROVE", "1")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
