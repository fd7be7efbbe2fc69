"""Central configuration for the FundsXML checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Context
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
ARCHIVE_DIR = DATA_DIR / "archive"

# Shown next to date fields in reports; dates are only checked for presence.
DATE_FORMAT_HINT = "YYYY-MM-DD"


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    consistency_places: int
    log_level: str
    archive_dir: Path
    date_format_hint: str


def get_settings() -> Settings:
    return Settings(
        decimal_context=Context(prec=28),
        consistency_places=2,
        log_level=os.getenv("FUNDSXML_LOG_LEVEL", "INFO").upper(),
        archive_dir=Path(os.getenv("FUNDSXML_ARCHIVE_DIR", str(ARCHIVE_DIR))),
        date_format_hint=DATE_FORMAT_HINT,
    )


SETTINGS = get_settings()
