"""Configuration for the GoDrive application, read from the environment."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Repository backend: "memory" or "document"
STORAGE = os.getenv("GODRIVE_STORAGE", "memory")

# Document store
DOCSTORE_URL = os.getenv("GODRIVE_DOCSTORE_URL", "http://localhost:3000")
DOCSTORE_FILE = os.getenv("GODRIVE_DOCSTORE_FILE", os.path.join("data", "db.json"))
DOCSTORE_TIMEOUT = float(os.getenv("GODRIVE_DOCSTORE_TIMEOUT", "5"))

# REST API
HOST = os.getenv("GODRIVE_HOST", "0.0.0.0")
PORT = int(os.getenv("GODRIVE_PORT", "8000"))

LOG_LEVEL = os.getenv("GODRIVE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = None) -> None:
    """Set up root logging once for a GoDrive process."""
    logging.basicConfig(level=getattr(logging, level or LOG_LEVEL, logging.INFO),
                        format=LOG_FORMAT)
