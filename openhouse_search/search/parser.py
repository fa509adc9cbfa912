"""
Recover a structured search intent from raw LLM text.

The model is asked for a bare JSON object but may wrap it in a fenced code
block or surround it with prose. Each strategy below looks for one of those
shapes and returns the decoded object, or ``None`` when its shape is absent
or does not decode. Strategies run in order and the first object wins; when
none matches, a deterministic fallback intent is built from the query.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from .models import Intent, SuggestedFilters

logger = logging.getLogger(__name__)

FALLBACK_EXPLANATION = "The analysis could not be performed correctly."

_FENCED_LABELED_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_FENCED_RE = re.compile(r"```\s*(.*?)\s*```", re.DOTALL)
_decoder = json.JSONDecoder()


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _bare_json(content: str) -> dict[str, Any] | None:
    return _loads_object(content.strip())


def _fenced_labeled(content: str) -> dict[str, Any] | None:
    match = _FENCED_LABELED_RE.search(content)
    return _loads_object(match.group(1)) if match else None


def _fenced_unlabeled(content: str) -> dict[str, Any] | None:
    match = _FENCED_RE.search(content)
    return _loads_object(match.group(1)) if match else None


def _embedded_object(content: str) -> dict[str, Any] | None:
    start = content.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(content, start)
        except ValueError:
            value = None
        if isinstance(value, dict):
            return value
        start = content.find("{", start + 1)
    return None


STRATEGIES: tuple[tuple[str, Callable[[str], dict[str, Any] | None]], ...] = (
    ("bare_json", _bare_json),
    ("fenced_labeled", _fenced_labeled),
    ("fenced_unlabeled", _fenced_unlabeled),
    ("embedded_object", _embedded_object),
)


def extract_payload(content: str) -> tuple[str, dict[str, Any]] | None:
    """Return ``(strategy_name, payload)`` for the first strategy that decodes."""
    for name, strategy in STRATEGIES:
        payload = strategy(content)
        if payload is not None:
            return name, payload
    return None


def fallback_intent(query: str) -> Intent:
    return Intent(
        enhanced_query=query,
        keywords=[t for t in query.split() if len(t) > 3],
        suggested_filters=SuggestedFilters(),
        explanation=FALLBACK_EXPLANATION,
        recommended_ids=[],
    )


def _intent_from_payload(payload: dict[str, Any], query: str) -> Intent:
    filters = payload.get("filters") or payload.get("suggestedFilters") or {}
    if not isinstance(filters, dict):
        filters = {}
    recommended = payload.get("recommendations", payload.get("recommendedIds"))
    enhanced = payload.get("enhancedQuery")
    explanation = payload.get("explanation")
    return Intent(
        enhanced_query=enhanced if isinstance(enhanced, str) and enhanced else query,
        keywords=payload.get("keywords") or [],
        suggested_filters=SuggestedFilters(
            region=filters.get("region"),
            city=filters.get("city", filters.get("ville")),
            diploma=filters.get("diploma", filters.get("diplome")),
        ),
        explanation=explanation if isinstance(explanation, str) else "",
        recommended_ids=recommended or [],
    )


def parse_intent(content: Any, query: str) -> Intent:
    """
    Turn raw model text into an Intent.

    Never raises: absent content, text with no decodable JSON object, or an
    object that does not validate all yield ``fallback_intent(query)``.
    """
    try:
        if not content or not isinstance(content, str):
            raise ValueError("LLM response content is missing or not text")
        found = extract_payload(content)
        if found is None:
            raise ValueError("No JSON object found in LLM response")
        name, payload = found
        intent = _intent_from_payload(payload, query)
        logger.debug("Parsed intent with %s strategy: %d keywords", name, len(intent.keywords))
        return intent
    except Exception:
        logger.warning(
            "Intent parsing failed, using fallback. Raw response: %r", content, exc_info=True
        )
        return fallback_intent(query)
