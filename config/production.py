import os

from .config import Config, db_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = db_config()

CHECKIN_POLICY = Config.CHECKIN_POLICY
ATTENDANCE_TIMEZONE = Config.ATTENDANCE_TIMEZONE
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
