from __future__ import annotations

import re
from typing import Any, Iterable

from .models import Facets

SCORED_FIELDS = (
    "intitule",
    "nom_etablissement",
    "nom_composante",
    "debouches",
    "nom_diplome",
)

# Facet attribute -> record column, matched exactly
FACET_FIELDS = (
    ("region", "nom_region"),
    ("diploma_type", "nom_diplome"),
    ("city", "nom_ville"),
    ("institution", "nom_etablissement"),
)


def _score_record(record: dict[str, Any], patterns: list[re.Pattern[str]]) -> int:
    """One point per (keyword, field) pair that matches."""
    fields = [str(record[f]) for f in SCORED_FIELDS if record.get(f)]
    return sum(1 for pattern in patterns for field in fields if pattern.search(field))


def score_records(
    records: list[dict[str, Any]],
    keywords: list[str],
) -> list[dict[str, Any]]:
    """
    Annotate each record with ``relevanceScore`` and sort by it, highest
    first. The sort is stable, so ties keep their source order. Without
    keywords every score is 0 and the order is left untouched.
    """
    if not keywords:
        return [{**record, "relevanceScore": 0} for record in records]

    patterns = [re.compile(re.escape(kw), re.IGNORECASE) for kw in keywords]
    scored = [
        {**record, "relevanceScore": _score_record(record, patterns)} for record in records
    ]
    return sorted(scored, key=lambda r: r["relevanceScore"], reverse=True)


def merge_recommendations(
    records: list[dict[str, Any]],
    recommended_ids: Iterable[int],
) -> list[dict[str, Any]]:
    """
    Move records the LLM recommended ahead of the rest.

    A stable partition: each side keeps its incoming (relevance) order, the
    order of ``recommended_ids`` itself is not applied.
    """
    wanted = set(recommended_ids)
    if not wanted:
        return records
    recommended = [r for r in records if r.get("id_jpo") in wanted]
    others = [r for r in records if r.get("id_jpo") not in wanted]
    return recommended + others


def apply_facets(records: list[dict[str, Any]], facets: Facets | None) -> list[dict[str, Any]]:
    if facets is None:
        return records
    for attr, column in FACET_FIELDS:
        if facets.is_set(attr):
            value = getattr(facets, attr)
            records = [r for r in records if r.get(column) == value]
    return records
