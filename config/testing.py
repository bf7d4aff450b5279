import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("HRMS_API_URL", "http://hrms.test/api"),
    "timeout": 2.0,
}

REFRESH_INTERVAL_SECONDS = 1

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
