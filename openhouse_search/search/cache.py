from __future__ import annotations

import hashlib
import json
import logging
import time
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)

_cache: OrderedDict[str, dict[str, Any]] = OrderedDict()
_hits: int = 0
_misses: int = 0
DEFAULT_TTL = 60 * 60  # 1 hour
MAX_ENTRIES = 1024


def make_key(request_dict: dict) -> str:
    """Fingerprint a request from the canonical JSON form of query and facets."""
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def cache_get(request_dict: dict, ttl: float = DEFAULT_TTL) -> Any | None:
    global _hits, _misses
    key = make_key(request_dict)
    entry = _cache.get(key)
    if entry and time.time() - entry["created_at"] < ttl:
        _hits += 1
        try:
            _cache.move_to_end(key)
        except KeyError:
            pass  # evicted by a concurrent request; the entry is still served
        return entry["value"]
    if entry and _cache.get(key) is entry:
        # Only drop the stale entry itself, never a value written meanwhile.
        _cache.pop(key, None)
    _misses += 1
    return None


def cache_set(request_dict: dict, value: Any) -> None:
    key = make_key(request_dict)
    _cache.pop(key, None)
    _cache[key] = {"value": value, "created_at": time.time()}
    while len(_cache) > MAX_ENTRIES:
        evicted, _ = _cache.popitem(last=False)  # least recently used
        logger.debug("Evicted search cache entry %s", evicted)


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_cache),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    _cache.clear()
    _hits = 0
    _misses = 0
