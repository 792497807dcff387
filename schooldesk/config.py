import os

from dotenv import load_dotenv

load_dotenv()


def _first_env(*names: str) -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return ""


# Environment & Security setup
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 12

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def supabase_url() -> str:
    return _first_env("SUPABASE_URL", "VITE_SUPABASE_URL")


def supabase_key() -> str:
    return _first_env("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY")


# Credit accounting
SCHOOL_INSTANCE_ID = int(os.getenv("SCHOOL_INSTANCE_ID", 1))
DEFAULT_CREDITS = int(os.getenv("DEFAULT_CREDITS", 500))
MONTHLY_LIMIT = int(os.getenv("MONTHLY_LIMIT", 500))
POPULAR_THRESHOLD = int(os.getenv("POPULAR_THRESHOLD", 50))

# Optional TTF used for Bengali glyphs in exported PDFs
PDF_FONT_PATH = os.getenv("PDF_FONT_PATH", "")
