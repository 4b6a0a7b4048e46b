from config.config import Config

DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

FINGERPRINT_MATCH_THRESHOLD = Config.FINGERPRINT_MATCH_THRESHOLD

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
