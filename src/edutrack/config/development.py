import os

from . import env_list

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "edutrack"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Roles that may log in while the administration lock is on.
LOCK_EXEMPT_ROLES = env_list("LOCK_EXEMPT_ROLES", "ADMIN")
ADMISSION_ENFORCES_LOGIN_LOCK = bool(int(os.getenv("ADMISSION_ENFORCES_LOGIN_LOCK", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the bootstrap administrator
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
