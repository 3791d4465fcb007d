import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Signs bearer tokens; must be identical on every instance.
TOKEN_SECRET = os.getenv("TOKEN_SECRET", "dev-token-secret-change-me-0123456789abcdef")
TOKEN_LIFETIME_SECONDS = int(os.getenv("TOKEN_LIFETIME_SECONDS", str(8 * 60 * 60)))

PIN_HASH_METHOD = os.getenv("PIN_HASH_METHOD", "pbkdf2:sha256:600000")
PIN_VERIFY_TIMEOUT_SECONDS = float(os.getenv("PIN_VERIFY_TIMEOUT_SECONDS", "5"))

# 'memory' keeps state in process (lost on restart); 'mysql' is durable.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users/projects on startup (mysql backend)
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
