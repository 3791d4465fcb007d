import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

TOKEN_SECRET = os.getenv("TOKEN_SECRET", "")
TOKEN_LIFETIME_SECONDS = int(os.getenv("TOKEN_LIFETIME_SECONDS", str(8 * 60 * 60)))

PIN_HASH_METHOD = os.getenv("PIN_HASH_METHOD", "pbkdf2:sha256:600000")
PIN_VERIFY_TIMEOUT_SECONDS = float(os.getenv("PIN_VERIFY_TIMEOUT_SECONDS", "5"))

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
