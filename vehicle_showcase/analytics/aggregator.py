from __future__ import annotations

from collections import Counter
from typing import Any

from ..showcase.models import TierName


def compute_analytics(showcases: list[dict[str, Any]]) -> dict[str, Any]:
    """Summarise showcase events, as returned by ``get_events(SHOWCASE_EVENT)``."""
    total = len(showcases)

    # Average response time
    times = [s["response_time_ms"] for s in showcases if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Tier usage, every tier listed even when unused
    tier_counter: Counter[str] = Counter(s.get("tier", "unknown") for s in showcases)
    tier_usage = {tier.value: tier_counter.get(tier.value, 0) for tier in TierName}

    # Hidden vehicles per showcase
    hidden = [s.get("hidden", 0) for s in showcases]
    avg_hidden = round(sum(hidden) / total, 1) if total else 0.0

    # Share of showcases containing demo/incomplete listings
    with_fallbacks = sum(1 for s in showcases if s.get("has_fallbacks"))

    cache_hits = sum(1 for s in showcases if s.get("cache_hit"))

    return {
        "total_showcases": total,
        "avg_response_time_ms": avg_time,
        "tier_usage": tier_usage,
        "avg_hidden": avg_hidden,
        "fallback_rate": round(with_fallbacks / total * 100, 1) if total else 0.0,
        "discarded_total": sum(s.get("discarded", 0) for s in showcases),
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
