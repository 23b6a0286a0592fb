import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

TOKEN_MAX_AGE_SECONDS = 3600

STANDARD_ALLOWANCE = "4167.00"
PROFESSIONAL_TAX = "200.00"
DEFAULT_PAID_LEAVE_DAYS = 12
DEFAULT_SICK_LEAVE_DAYS = 6
