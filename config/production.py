import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("HRMS_API_URL", "http://localhost:5000/api"),
    "timeout": float(os.getenv("HRMS_API_TIMEOUT", "15")),
}

REFRESH_INTERVAL_SECONDS = int(os.getenv("REFRESH_INTERVAL_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
