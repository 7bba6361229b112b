from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from vehicle_showcase.app import app
from vehicle_showcase.showcase.cache import (
    cache_get,
    cache_set,
    clear_cache,
    get_cache_stats,
    showcase_key,
)
from vehicle_showcase.showcase.config import ShowcaseConfig
from vehicle_showcase.showcase.models import RawVehicle, ShowcaseRequest
from vehicle_showcase.showcase.service import build_showcase

client = TestClient(app)

CLOCK = "vehicle_showcase.showcase.cache.time.time"


def _request(n: int = 3) -> ShowcaseRequest:
    return ShowcaseRequest(vehicles=[
        RawVehicle(id=f"v-{i}", make="Renault", model="Kangoo", price_per_day=28000, total_bookings=i)
        for i in range(n)
    ])


def test_cache_miss_then_hit():
    clear_cache()
    first = build_showcase(_request())
    assert get_cache_stats()["misses"] == 1

    second = build_showcase(_request())
    stats = get_cache_stats()
    assert stats["hits"] == 1
    assert second == first
    assert second is not first


def test_cache_hit_ignores_caller_mutation():
    clear_cache()
    first = build_showcase(_request())
    first.distribution.featured.clear()
    first.distribution.grid.append(first.distribution.grid[0])

    again = build_showcase(_request())
    assert get_cache_stats()["hits"] == 1
    assert len(again.distribution.featured) == 1
    assert len(again.distribution.grid) == 2


def test_cache_different_requests_miss():
    clear_cache()
    build_showcase(_request(3))
    build_showcase(_request(4))
    stats = get_cache_stats()
    assert stats["misses"] == 2
    assert stats["hits"] == 0


def test_cache_key_includes_display_options():
    clear_cache()
    plain = build_showcase(_request(8))
    narrowed = build_showcase(ShowcaseRequest(vehicles=_request(8).vehicles, display_options={"max_grid_items": 2}))
    assert plain.distribution.strategy.max_grid_items == 8
    assert narrowed.distribution.strategy.max_grid_items == 2


def test_cache_key_includes_popularity_threshold():
    clear_cache()
    request = ShowcaseRequest(vehicles=[
        RawVehicle(id="v-3", make="Renault", model="Kangoo", price_per_day=28000, total_bookings=3),
    ])
    default = build_showcase(request)
    lowered = build_showcase(request, ShowcaseConfig(popularity_threshold=2))
    assert default.distribution.featured[0].is_popular is False
    assert lowered.distribution.featured[0].is_popular is True
    assert get_cache_stats()["hits"] == 0


def test_cache_key_includes_demo_mode():
    request = _request(0)
    assert showcase_key(request, ShowcaseConfig(demo_mode=True)) != showcase_key(request, ShowcaseConfig(demo_mode=False))
    assert showcase_key(request, ShowcaseConfig(cache_ttl_seconds=5)) == showcase_key(request, ShowcaseConfig())


def test_cache_entry_expires():
    clear_cache()
    response = build_showcase(_request())
    clear_cache()
    with patch(CLOCK, return_value=1000.0):
        cache_set("k", response, ttl=300)
    with patch(CLOCK, return_value=1000.0 + 301):
        assert cache_get("k", ttl=300) is None
    assert get_cache_stats()["size"] == 0


def test_cache_set_evicts_stale_entries_under_other_keys():
    clear_cache()
    response = build_showcase(_request())
    clear_cache()
    with patch(CLOCK, return_value=1000.0):
        cache_set("old-a", response, ttl=300)
        cache_set("old-b", response, ttl=300)
    assert get_cache_stats()["size"] == 2

    with patch(CLOCK, return_value=1000.0 + 301):
        cache_set("fresh", response, ttl=300)
        assert get_cache_stats()["size"] == 1
        assert cache_get("fresh", ttl=300) == response


def test_cache_drops_oldest_when_full():
    clear_cache()
    response = build_showcase(_request())
    clear_cache()
    for key in ("a", "b", "c"):
        cache_set(key, response, max_entries=2)
    assert get_cache_stats()["size"] == 2
    assert cache_get("a") is None
    assert cache_get("c") == response


def test_cache_stats_endpoint():
    clear_cache()
    payload = {"vehicles": [{"id": "a", "make": "Kia", "model": "Rio", "price_per_day": 18000}]}
    client.post("/showcase", json=payload)
    client.post("/showcase", json=payload)
    resp = client.get("/cache/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["hits"] >= 1
    assert "hit_rate" in body
