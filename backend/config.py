import os
from dotenv import load_dotenv

load_dotenv()

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
# Access tokens issued by Supabase Auth are HS256 JWTs signed with this secret
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "")
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"

# --- Data backend ---
# "supabase" talks to PostgREST, "sql" uses SQLAlchemy against DATABASE_URL
DATA_BACKEND = os.getenv("DATA_BACKEND", "supabase").strip().lower()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/habitflow.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Unset means httpx's own default applies
HTTP_TIMEOUT = float(os.environ["HTTP_TIMEOUT"]) if os.getenv("HTTP_TIMEOUT") else None

# --- App ---
APP_NAME = os.getenv("APP_NAME", "HabitFlow")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
