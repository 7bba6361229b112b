"""Memo cache for showcase responses.

Entries are keyed by the showcase request together with the config values
that change the result, and live for ``cache_ttl_seconds``. Every write
sweeps out expired entries, then drops the oldest ones until the cache fits
in ``cache_max_entries``.
"""
from __future__ import annotations

import hashlib
import json
import time
from typing import NamedTuple

from .config import DEFAULT_SHOWCASE_CONFIG, ShowcaseConfig
from .models import ShowcaseRequest, ShowcaseResponse


class _Entry(NamedTuple):
    response: ShowcaseResponse
    stored_at: float


# Insertion order doubles as age order: oldest first.
_cache: dict[str, _Entry] = {}
_hits: int = 0
_misses: int = 0


def showcase_key(request: ShowcaseRequest, config: ShowcaseConfig = DEFAULT_SHOWCASE_CONFIG) -> str:
    payload = {
        "request": request.model_dump(mode="json"),
        "popularity_threshold": config.popularity_threshold,
        "demo_mode": config.demo_mode,
    }
    normalized = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def cache_get(key: str, ttl: int = DEFAULT_SHOWCASE_CONFIG.cache_ttl_seconds) -> ShowcaseResponse | None:
    """Return a private copy of the stored response, or None when absent or expired."""
    global _hits, _misses
    entry = _cache.get(key)
    if entry is not None and time.time() - entry.stored_at < ttl:
        _hits += 1
        return entry.response.model_copy(deep=True)
    if entry is not None:
        del _cache[key]
    _misses += 1
    return None


def cache_set(
    key: str,
    response: ShowcaseResponse,
    ttl: int = DEFAULT_SHOWCASE_CONFIG.cache_ttl_seconds,
    max_entries: int = DEFAULT_SHOWCASE_CONFIG.cache_max_entries,
) -> None:
    now = time.time()
    _purge_expired(now, ttl)
    _cache.pop(key, None)
    _cache[key] = _Entry(response.model_copy(deep=True), now)
    while len(_cache) > max(1, max_entries):
        del _cache[next(iter(_cache))]


def _purge_expired(now: float, ttl: int) -> None:
    expired = [k for k, entry in _cache.items() if now - entry.stored_at >= ttl]
    for k in expired:
        del _cache[k]


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
