import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv(dotenv_path=".env")

API_NAME = "Wedding Wishes API"
API_VERSION = "1.0.0"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./wishes.db")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
PORT = int(os.getenv("PORT", 8000))

# NO_COLOR wins over LOG_COLORS (https://no-color.org)
LOG_COLORS = os.getenv("LOG_COLORS", "true").lower() in ("1", "true", "yes") and not os.getenv("NO_COLOR")

# Kosongkan untuk memakai zona waktu lokal proses
TIMEZONE = os.getenv("TZ")
