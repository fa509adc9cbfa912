from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_RECORDS = Path(__file__).resolve().parent.parent / "data" / "open_days.csv"


@dataclass(frozen=True)
class DataConfig:
    """
    Location of the denormalized open-day export (one row per open day,
    already joined with component, city, region, institution and programme).
    CSV and JSON files are supported.
    """

    records_path: Path = Path(os.getenv("OPENHOUSE_RECORDS_PATH", str(_DEFAULT_RECORDS)))


DEFAULT_DATA_CONFIG = DataConfig()
