import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_management"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]

WORKDAY_START = os.getenv("WORKDAY_START", "09:00")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "60"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
