import os

SECRET_KEY = "test-secret"

TOKEN_SECRET = "test-token-secret-0123456789abcdef0123456789"
TOKEN_LIFETIME_SECONDS = 8 * 60 * 60

# Cheap hash so the suite stays fast; production keeps the full work factor.
PIN_HASH_METHOD = "pbkdf2:sha256:1000"
PIN_VERIFY_TIMEOUT_SECONDS = None

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
