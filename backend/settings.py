# settings.py
# Environment-based settings. A .env file, when present, is read first.
import os
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./app.db")

# Supabase (PostgREST) connection. An empty URL selects the local SQL table.
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
SCHEDULES_TABLE = os.getenv("SCHEDULES_TABLE", "schedules")
STORE_TIMEOUT = float(os.getenv("STORE_TIMEOUT", "15"))

APP_TIMEZONE = ZoneInfo(os.getenv("APP_TIMEZONE", "UTC"))

WEB_ORIGIN = os.getenv("WEB_ORIGIN", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
