from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .embeddings.encoder import encode_text
from .search.cache import get_cache_stats
from .search.data_store import get_filter_options, get_records
from .search.engine import search
from .search.errors import UpstreamUnavailable
from .search.models import (
    EmbedRequest,
    EmbedResponse,
    FilterOptions,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Open House Search API", version="1.0.0")


@app.exception_handler(UpstreamUnavailable)
def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": f"Search failed: {exc.message}"},
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/data")
def data():
    try:
        return get_records()
    except Exception:
        logger.error("Failed to load open-day records", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch open-day records"},
        )


@app.get("/filters", response_model=FilterOptions)
def filters():
    try:
        records = get_records()
    except Exception:
        logger.error("Failed to load open-day records", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch filter options"},
        )
    return FilterOptions(**get_filter_options(records))


# ── Search ───────────────────────────────────────────────────────────────


@app.post("/search", response_model=SearchResponse)
def enhanced_search(body: SearchRequest) -> SearchResponse:
    return search(body)


@app.post("/embed", response_model=EmbedResponse)
def embed(body: EmbedRequest):
    try:
        vector = encode_text(body.text)
    except Exception:
        logger.error("Embedding generation failed", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate embedding"},
        )
    return EmbedResponse(embedding=vector.tolist())


# ── Operations ───────────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
