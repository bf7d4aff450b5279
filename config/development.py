import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("HRMS_API_URL", "http://localhost:5000/api"),
    "timeout": float(os.getenv("HRMS_API_TIMEOUT", "15")),
}

# Admin dashboard refresh period
REFRESH_INTERVAL_SECONDS = int(os.getenv("REFRESH_INTERVAL_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
