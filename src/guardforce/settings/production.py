import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "guardforce_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL") or None
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD") or None

GST_RATE = float(os.getenv("GST_RATE", "18"))
INVOICE_FALLBACK_PATH = os.getenv("INVOICE_FALLBACK_PATH") or None
ATTENDANCE_POLL_SECONDS = int(os.getenv("ATTENDANCE_POLL_SECONDS", "30"))
