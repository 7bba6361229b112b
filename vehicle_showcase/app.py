from __future__ import annotations

from fastapi import FastAPI, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import SHOWCASE_EVENT, get_events
from .showcase.cache import get_cache_stats
from .showcase.data_store import get_demo_fleet, get_fleet_frame
from .showcase.models import (
    DisplayStrategy,
    ShowcaseRequest,
    ShowcaseResponse,
    StrategySelectRequest,
)
from .showcase.service import build_showcase
from .showcase.strategies import list_strategies, select_strategy

app = FastAPI(title="Vehicle Showcase API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    df = get_fleet_frame()
    cities = sorted(df["city"].dropna().unique().tolist())
    types = sorted(t for t in df["type"].dropna().unique().tolist() if t)
    return {"cities": cities, "vehicle_types": types}


# ── Strategy endpoints ───────────────────────────────────────────────────


@app.get("/strategies", response_model=list[DisplayStrategy])
def strategies() -> list[DisplayStrategy]:
    return list_strategies()


@app.post("/strategies/select", response_model=DisplayStrategy)
def strategy_for_count(body: StrategySelectRequest) -> DisplayStrategy:
    return select_strategy(body.count, body.override)


# ── Showcase endpoints ───────────────────────────────────────────────────


@app.post("/showcase", response_model=ShowcaseResponse)
def showcase(body: ShowcaseRequest) -> ShowcaseResponse:
    return build_showcase(body)


@app.get("/showcase/demo", response_model=ShowcaseResponse)
def showcase_demo(
    vehicle_type: str | None = None,
    limit: int = Query(default=6, ge=1, le=50),
) -> ShowcaseResponse:
    fleet = get_demo_fleet()[:limit]
    return build_showcase(ShowcaseRequest(vehicles=fleet, vehicle_type=vehicle_type))


# ── Ops endpoints ────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events(SHOWCASE_EVENT))


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
