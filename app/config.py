"""Application settings read from the environment (.env is loaded first)"""
import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Session cookie / JWT
SESSION_SECRET = os.getenv("SESSION_SECRET", "")
SESSION_ALGORITHM = "HS256"
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "user_session")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(60 * 60 * 24 * 7)))  # 7 days
SESSION_COOKIE_SECURE = APP_ENV == "production"

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Day timeline
SLOTS_PER_DAY = int(os.getenv("SLOTS_PER_DAY", "24"))
SLOT_MINUTES = int(os.getenv("SLOT_MINUTES", "60"))
