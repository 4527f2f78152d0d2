import logging
import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

# SQLite file beside the backend package
DB_PATH = Path(__file__).resolve().parents[2] / "data.db"

APP_ENV = os.getenv("APP_ENV", "development")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "3000")

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{DB_PATH}")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_port() -> int:
    try:
        port = int(PORT)
    except ValueError as exc:
        raise RuntimeError(f"PORT must be an integer, got {PORT!r}.") from exc

    if not 1 <= port <= 65535:
        raise RuntimeError(f"PORT must be between 1 and 65535, got {port}.")

    return port


def validate_runtime_config() -> None:
    get_port()

    if LOG_LEVEL not in logging.getLevelNamesMapping():
        raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {LOG_LEVEL!r}.")
