import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tuition_center"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

DEFAULT_WORKING_DAYS = int(os.getenv("DEFAULT_WORKING_DAYS", "26"))
PASS_MARK = float(os.getenv("PASS_MARK", "35"))

ORGANIZATION = {
    "name": os.getenv("ORG_NAME", "Tuition Center"),
    "address": os.getenv("ORG_ADDRESS", ""),
    "phone": os.getenv("ORG_PHONE", ""),
}
