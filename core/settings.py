"""Configuration helpers and Settings container.

`get_settings` reads the environment (and a `.env` file at the project root)
on every call, so tests can override values with `monkeypatch.setenv`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API and the Streamlit frontend.

    Attributes:
        data_dir: Directory holding the three dataset JSON files.
        host: Address the API binds to.
        port: Port the API listens on.
        backend_url: Base URL the frontend fetches datasets from.
        cors_origins: Origins allowed by the API's CORS middleware.
        log_level: Logging level for `configure_logging`.
    """

    data_dir: Path
    host: str = "127.0.0.1"
    port: int = 4000
    backend_url: str = "http://localhost:4000"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: int = logging.INFO


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `PORT` is not an integer or `LOG_LEVEL` is unknown.
    """
    data_dir = Path(os.getenv("ACV_DATA_DIR", str(PROJECT_ROOT / "data")))
    host = os.getenv("HOST", "127.0.0.1").strip() or "127.0.0.1"

    raw_port = os.getenv("PORT", "4000").strip()
    try:
        port = int(raw_port)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {raw_port!r}") from None

    backend_url = os.getenv("BACKEND_URL", f"http://localhost:{port}").strip().rstrip("/")
    cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()] or ["*"]

    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise RuntimeError(f"LOG_LEVEL {level_name!r} is not a logging level name")

    return Settings(
        data_dir=data_dir,
        host=host,
        port=port,
        backend_url=backend_url,
        cors_origins=cors_origins,
        log_level=log_level,
    )
