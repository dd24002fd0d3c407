SECRET_KEY = "test-secret"

DB_CONFIG = {}

STORE_BACKEND = "memory"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

DEFAULT_WORKING_DAYS = 26
PASS_MARK = 35

ORGANIZATION = {"name": "Test Tuition Center", "address": "1 Test Road", "phone": "000"}
