import os

from config.config import Config

DB_CONFIG = {**Config.db_config(), "database": os.getenv("DB_NAME", "workforce_test")}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

FINGERPRINT_MATCH_THRESHOLD = Config.FINGERPRINT_MATCH_THRESHOLD

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
