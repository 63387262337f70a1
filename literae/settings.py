# literae/settings.py
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from the project .env (optional) before reading them
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_CORS_ORIGINS = "http://localhost:5713,https://literae-ngdw.vercel.app"
GOOGLE_BOOKS_API_URL = "https://www.googleapis.com/books/v1/volumes"


def _as_int(val: Optional[str], default: int) -> int:
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _as_float(val: Optional[str], default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _as_list(val: Optional[str]) -> List[str]:
    return [item.strip() for item in (val or "").split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.GOOGLE_BOOKS_API_KEY: Optional[str] = (
            os.getenv("GOOGLE_BOOKS_API_KEY") or os.getenv("GOOGLE_BOOKS_KEY_3") or None
        )
        self.GOOGLE_BOOKS_API_URL: str = os.getenv("GOOGLE_BOOKS_API_URL", GOOGLE_BOOKS_API_URL).rstrip("/")
        self.UPSTREAM_TIMEOUT: float = _as_float(os.getenv("UPSTREAM_TIMEOUT"), 10.0)
        self.CORS_ORIGINS: List[str] = _as_list(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _as_int(os.getenv("PORT"), 5000)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
