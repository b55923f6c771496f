import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
    "connection_timeout": int(os.getenv("DB_CONNECTION_TIMEOUT", "10")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
# Generate payroll for every month found in attendance history on startup
AUTO_BACKFILL_PAYROLL = bool(int(os.getenv("AUTO_BACKFILL_PAYROLL", "1")))

# Deductions per Late / Absent day, same unit as employees.base_salary
LATE_DEDUCTION_RATE = os.getenv("LATE_DEDUCTION_RATE", "200")
ABSENT_DEDUCTION_RATE = os.getenv("ABSENT_DEDUCTION_RATE", "500")
PAYROLL_MAX_WORKERS = int(os.getenv("PAYROLL_MAX_WORKERS", "1"))
