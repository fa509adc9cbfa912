from __future__ import annotations

import logging
import time

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import request_intent
from .cache import cache_get, cache_set
from .data_store import get_records
from .errors import UpstreamUnavailable
from .models import Intent, Record, SearchRequest, SearchResponse
from .parser import parse_intent
from .ranking import apply_facets, merge_recommendations, score_records

logger = logging.getLogger(__name__)

NO_RECORDS_MESSAGE = "No open days were found in the database."
BLANK_QUERY_EXPLANATION = "No search text was given; only the selected filters were applied."


def _cache_key(request: SearchRequest) -> dict:
    return {"query": request.query, "facets": request.facets.model_dump()}


def search(
    request: SearchRequest,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> SearchResponse:
    start_time = time.time()

    # --- Cache check ---
    key = _cache_key(request)
    cached = cache_get(key)
    if cached is not None:
        logger.debug("Search cache hit for %r", request.query)
        return cached

    # --- Records ---
    try:
        records = get_records()
    except Exception as exc:
        logger.error("Record source unavailable", exc_info=True)
        raise UpstreamUnavailable(str(exc), provider_name="records") from exc

    if not records:
        return SearchResponse(results=[], intent=None, total_results=0, message=NO_RECORDS_MESSAGE)

    # --- Intent ---
    query = request.query.strip()
    if query:
        try:
            content = request_intent(query, records, config=config)
        except Exception as exc:
            logger.error("Groq intent extraction failed", exc_info=True)
            raise UpstreamUnavailable(str(exc), provider_name="groq") from exc
        intent = parse_intent(content, query)
    else:
        intent = Intent(explanation=BLANK_QUERY_EXPLANATION)

    # --- Ranking and filters ---
    ranked = score_records(records, intent.keywords)
    ranked = merge_recommendations(ranked, intent.recommended_ids)
    filtered = apply_facets(ranked, request.facets)

    response = SearchResponse(
        results=[Record.model_validate(r) for r in filtered],
        intent=intent,
        total_results=len(filtered),
    )
    cache_set(key, response)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Search %r: %d of %d records, %d keywords, %d recommended (%.1f ms)",
        query, len(filtered), len(records), len(intent.keywords),
        len(intent.recommended_ids), elapsed_ms,
    )
    return response
