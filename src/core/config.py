"""
Centralised application settings loaded from environment / .env file.
"""
from __future__ import annotations

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Load .env from project root (two levels up from this file)
_ENV_PATH = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseSettings):
    # ── Engine ───────────────────────────────────────────
    numeric_policy: str = "exclude"  # exclude | zero
    drilldowns_path: str = str(_PROJECT_ROOT / "config" / "drilldowns.yml")

    # ── Export ───────────────────────────────────────────
    export_title: str = "Drilldown Export"
    export_filename: str = "drilldown_export.csv"
    export_dir: str = str(_PROJECT_ROOT / "exports")

    # ── App ──────────────────────────────────────────────
    api_port: int = 8000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
