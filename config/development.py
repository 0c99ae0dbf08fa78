import os

from .config import Config, db_config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = db_config()

CHECKIN_POLICY = Config.CHECKIN_POLICY
ATTENDANCE_TIMEZONE = Config.ATTENDANCE_TIMEZONE
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES

DEBUG = True
LOG_LEVEL = "DEBUG"

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo offices/users on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB
