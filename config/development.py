import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_hub"),
}

# "mysql" or "memory" (state is lost on restart)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

AUDIT_LOG_LIMIT = int(os.getenv("AUDIT_LOG_LIMIT", "150"))

# Base URL used for the staff deep links; empty means the request host.
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
