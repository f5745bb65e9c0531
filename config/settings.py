from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


EXPORT_DIR_PREFIX = "Basic_LinkedInDataExport_"


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    log_level: str

    # Core/runtime
    run_env: str
    db_path: str

    # Export location. current_export names the active upload; data_dir overrides it.
    uploads_dir: str
    current_export: str | None
    data_dir: str | None

    # Limits/Concurrency
    parse_concurrency: int

    # Dashboard shaping
    top_n: int = 10
    page_size: int = 10
    job_company_options: int = 20
    connection_options: int = 30

    def export_root(self, export_id: str | None = None) -> Path | None:
        """Resolve the directory holding the export files, if one is configured."""
        if self.data_dir and export_id is None:
            return Path(self.data_dir)
        ident = export_id or self.current_export
        if not ident:
            return None
        return Path(self.uploads_dir) / f"{EXPORT_DIR_PREFIX}{ident}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        db_path=os.getenv("DB_PATH", "insights.db"),
        uploads_dir=os.getenv("UPLOADS_DIR", "uploads"),
        current_export=os.getenv("CURRENT_EXPORT") or None,
        data_dir=os.getenv("DATA_DIR") or None,
        parse_concurrency=int(os.getenv("PARSE_CONCURRENCY", "5")),
        top_n=int(os.getenv("TOP_N", "10")),
        page_size=int(os.getenv("PAGE_SIZE", "10")),
        job_company_options=int(os.getenv("JOB_COMPANY_OPTIONS", "20")),
        connection_options=int(os.getenv("CONNECTION_OPTIONS", "30")),
    )
