import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "record_suite_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

LOAN_PERIOD_DAYS = 14

AUTO_INIT_DB = False
AUTO_SEED_DB = True

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
