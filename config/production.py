import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "payroll"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

PAYROLL_RULE_STYLE = os.getenv("PAYROLL_RULE_STYLE", "general_factory")
RECALC_BATCH_SIZE = int(os.getenv("RECALC_BATCH_SIZE", "5"))
WAGE_FALLBACK_TO_LATEST = bool(int(os.getenv("WAGE_FALLBACK_TO_LATEST", "1")))
