import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Bearer tokens
TOKEN_MAX_AGE_SECONDS = int(os.getenv("TOKEN_MAX_AGE_SECONDS", str(24 * 60 * 60)))

# Payroll / leave policy
STANDARD_ALLOWANCE = os.getenv("STANDARD_ALLOWANCE", "4167.00")
PROFESSIONAL_TAX = os.getenv("PROFESSIONAL_TAX", "200.00")
DEFAULT_PAID_LEAVE_DAYS = int(os.getenv("DEFAULT_PAID_LEAVE_DAYS", "12"))
DEFAULT_SICK_LEAVE_DAYS = int(os.getenv("DEFAULT_SICK_LEAVE_DAYS", "6"))
