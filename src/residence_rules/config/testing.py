import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "residence_test"),
}

RECONCILE_AT = "23:00"
SCHEDULER_POLL_SECONDS = 1.0

NOTIFICATION_SENDER = "Administration"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_JSON = False
