import os
from pathlib import Path

from dotenv import load_dotenv, find_dotenv

# .env aus dem Projekt-Root laden, vorhandene Environment-Variablen gewinnen
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_ORIGINS = [
    "http://127.0.0.1:3000",
    "http://localhost:3000",
]


def database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "Keine Datenbank-URL gesetzt. Bitte setze DATABASE_URL "
            "(z.B. postgresql+psycopg://user:pw@localhost:5432/posts)."
        )
    return url


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", Path.cwd() / "uploads")).resolve()


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def api_base_url() -> str:
    return os.getenv("POSTS_API_URL", "http://127.0.0.1:8000").rstrip("/")
