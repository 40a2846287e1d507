import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "coursebook"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "coursebook"),
}

CHECKPOINT_WEIGHT = float(os.getenv("CHECKPOINT_WEIGHT", "0.6"))
DAILY_WEIGHT = float(os.getenv("DAILY_WEIGHT", "0.4"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
