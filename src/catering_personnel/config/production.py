import os

from ..core.constants import DEFAULT_LOG_FORMAT

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "catering_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT)

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
