from __future__ import annotations

import logging
import time

from ..analytics.store import SHOWCASE_EVENT, record_event
from .cache import cache_get, cache_set, showcase_key
from .config import DEFAULT_SHOWCASE_CONFIG, ShowcaseConfig
from .distributor import distribute
from .hints import display_stats, empty_state, generate_hints, grid_classes
from .models import RawVehicle, ShowcaseRequest, ShowcaseResponse
from .normalizer import normalize_all
from .strategies import select_strategy

logger = logging.getLogger(__name__)


def is_listable(vehicle: RawVehicle) -> bool:
    """A vehicle can be shown once it has an id, a make/model and a positive price."""
    return (
        bool(vehicle.id and vehicle.id.strip())
        and bool(vehicle.make and vehicle.make.strip())
        and bool(vehicle.model and vehicle.model.strip())
        and vehicle.price_per_day > 0
    )


def _matches_filters(vehicle: RawVehicle, vehicle_type: str | None, city: str | None) -> bool:
    if vehicle_type and (vehicle.type or "").strip().upper() != vehicle_type.strip().upper():
        return False
    if city and city.strip().lower() not in (vehicle.city or "").lower():
        return False
    return True


def build_showcase(
    request: ShowcaseRequest,
    config: ShowcaseConfig = DEFAULT_SHOWCASE_CONFIG,
) -> ShowcaseResponse:
    start_time = time.time()

    # --- Cache check ---
    key = showcase_key(request, config)
    cached = cache_get(key, ttl=config.cache_ttl_seconds)
    if cached is not None:
        _record(cached, start_time, cache_hit=True)
        return cached

    # --- Caller-side validation and hard filters ---
    listable = [v for v in request.vehicles if is_listable(v)]
    discarded = len(request.vehicles) - len(listable)
    if discarded:
        logger.debug("Discarded %d vehicles without id, make/model or price", discarded)

    candidates = [
        v for v in listable
        if _matches_filters(v, request.vehicle_type, request.city)
    ]

    # --- Engine ---
    normalized = normalize_all(candidates, config.popularity_threshold)
    strategy = select_strategy(len(normalized), request.display_options)
    distribution = distribute(normalized, strategy)

    response = ShowcaseResponse(
        distribution=distribution,
        hints=generate_hints(strategy, len(normalized)),
        stats=display_stats(distribution),
        show_filters=distribution.show_filters,
        show_view_all=distribution.show_view_all,
        grid_classes=grid_classes(strategy),
        discarded=discarded,
        empty_state=empty_state(has_attempted_load=True, demo_mode=config.demo_mode) if not normalized else None,
    )

    cache_set(key, response, ttl=config.cache_ttl_seconds, max_entries=config.cache_max_entries)
    _record(response, start_time, cache_hit=False)
    return response


def _record(response: ShowcaseResponse, start_time: float, cache_hit: bool) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event(SHOWCASE_EVENT, {
        "tier": response.distribution.strategy.name.value,
        "total": response.stats.total,
        "featured": response.stats.featured,
        "grid": response.stats.grid,
        "hidden": response.stats.hidden,
        "has_fallbacks": response.stats.has_fallbacks,
        "discarded": response.discarded,
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
