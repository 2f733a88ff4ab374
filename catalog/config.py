"""Centralized configuration for the catalog service."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Server settings (PORT is what most hosts set)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))

# Categories a product may be filed under
DEFAULT_CATEGORIES = (
    "Видеокарты",
    "Процессоры",
    "Материнские платы",
    "Оперативная память",
    "Накопители",
    "Мониторы",
    "Периферия",
)
ALLOWED_CATEGORIES = tuple(
    c.strip() for c in os.getenv("CATALOG_CATEGORIES", ",".join(DEFAULT_CATEGORIES)).split(",") if c.strip()
)

# Start with the demo catalogue instead of an empty store
LOAD_SEED = os.getenv("CATALOG_SEED", "True").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Used by the SDK command line and the interactive CLI
API_URL = os.getenv("CATALOG_API_URL", f"http://127.0.0.1:{PORT}")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once; later calls are no-ops."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
