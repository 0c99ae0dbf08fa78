import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "geo_attendance")
    DB_CONNECT_TIMEOUT = int(os.environ.get("DB_CONNECT_TIMEOUT", "5"))

    # Attendance rules
    CHECKIN_POLICY = os.environ.get("CHECKIN_POLICY", "reject")
    ATTENDANCE_TIMEZONE = os.environ.get("ATTENDANCE_TIMEZONE", "UTC")
    LATE_GRACE_MINUTES = int(os.environ.get("LATE_GRACE_MINUTES", "0"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))


def db_config() -> dict:
    """mysql-connector connection kwargs."""
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
        "connect_timeout": Config.DB_CONNECT_TIMEOUT,
    }
