from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from .config import DEFAULT_DATA_CONFIG, DataConfig

logger = logging.getLogger(__name__)

_records: list[dict[str, Any]] | None = None


def _load(config: DataConfig) -> pd.DataFrame:
    path = config.records_path
    if path.suffix.lower() == ".json":
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=True)
        if "id_jpo" in df.columns:
            df["id_jpo"] = pd.to_numeric(df["id_jpo"], errors="coerce").astype("Int64")
    return df


def _to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    # NaN / <NA> become None so no field is assumed present downstream
    cleaned = df.astype(object).where(df.notna(), None)
    records = cleaned.to_dict(orient="records")
    for record in records:
        if record.get("id_jpo") is not None:
            record["id_jpo"] = int(record["id_jpo"])
    return records


def get_records(config: DataConfig = DEFAULT_DATA_CONFIG) -> list[dict[str, Any]]:
    """Return every open-day record, loading the export on first call."""
    global _records
    if _records is None:
        df = _load(config)
        _records = _to_records(df)
        logger.info("Loaded %d open-day records from %s", len(_records), config.records_path)
    return _records


def clear_records() -> None:
    global _records
    _records = None


def get_filter_options(records: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Distinct facet values present in ``records``, sorted."""

    def _distinct(column: str) -> list[str]:
        return sorted({str(r[column]) for r in records if r.get(column)})

    return {
        "regions": _distinct("nom_region"),
        "cities": _distinct("nom_ville"),
        "institutions": _distinct("nom_etablissement"),
        "diplomas": _distinct("nom_diplome"),
    }
