"""
Display strategies
==================

The landing grid adapts to how many vehicles are available.  Four tiers are
defined, selected purely from the candidate count (inclusive upper bounds):

* **sparse** (<= 3) – one hero, a couple of cards, no filters.
* **limited** (<= 6) – filters become useful, nothing is hidden yet.
* **normal** (<= 12) – the usual catalog page with a "view all" link.
* **abundant** (13+) – two hero slots and real listings before demo ones.

Each tier carries its own ordered priority rules.  Callers can adjust a tier
through a :class:`StrategyOverride`: forcing a tier replaces its limits,
while narrowing the auto-selected tier can only lower them.
"""

from __future__ import annotations

import logging

from .models import (
    DisplayStrategy,
    GridColumns,
    PriorityRule,
    SortDirection,
    StrategyOverride,
    TierName,
)

logger = logging.getLogger(__name__)

ASC = SortDirection.asc
DESC = SortDirection.desc

# ---------------------------------------------------------------------------
# Tier tables
# ---------------------------------------------------------------------------

TIERS: dict[TierName, DisplayStrategy] = {
    TierName.sparse: DisplayStrategy(
        name=TierName.sparse,
        featured_count=1,
        max_grid_items=2,
        grid_columns=GridColumns(mobile=1, tablet=2, desktop=2),
        show_filters=False,
        show_view_all=False,
        priority_rules=(
            PriorityRule(field="total_bookings", direction=DESC, weight=8),
            PriorityRule(field="rating", direction=DESC, weight=7),
            PriorityRule(field="price_per_day", direction=ASC, weight=5),
        ),
    ),
    TierName.limited: DisplayStrategy(
        name=TierName.limited,
        featured_count=1,
        max_grid_items=5,
        grid_columns=GridColumns(mobile=1, tablet=2, desktop=3),
        show_filters=True,
        show_view_all=False,
        priority_rules=(
            PriorityRule(field="is_popular", direction=DESC, weight=9),
            PriorityRule(field="total_bookings", direction=DESC, weight=7),
            PriorityRule(field="rating", direction=DESC, weight=6),
            PriorityRule(field="price_per_day", direction=ASC, weight=4),
        ),
    ),
    TierName.normal: DisplayStrategy(
        name=TierName.normal,
        featured_count=1,
        max_grid_items=8,
        grid_columns=GridColumns(mobile=1, tablet=2, desktop=3),
        show_filters=True,
        show_view_all=True,
        priority_rules=(
            PriorityRule(field="has_photo", direction=DESC, weight=8),
            PriorityRule(field="is_popular", direction=DESC, weight=7),
            PriorityRule(field="rating", direction=DESC, weight=6),
            PriorityRule(field="total_bookings", direction=DESC, weight=5),
            PriorityRule(field="price_per_day", direction=ASC, weight=3),
        ),
    ),
    TierName.abundant: DisplayStrategy(
        name=TierName.abundant,
        featured_count=2,
        max_grid_items=12,
        grid_columns=GridColumns(mobile=1, tablet=2, desktop=4),
        show_filters=True,
        show_view_all=True,
        priority_rules=(
            PriorityRule(field="has_photo", direction=DESC, weight=9),
            PriorityRule(field="is_popular", direction=DESC, weight=8),
            PriorityRule(field="rating", direction=DESC, weight=7),
            PriorityRule(field="total_bookings", direction=DESC, weight=6),
            PriorityRule(field="price_per_day", direction=ASC, weight=4),
            # Real listings before demo/incomplete ones.
            PriorityRule(field="used_fallback", direction=ASC, weight=2),
        ),
    ),
}

_THRESHOLDS: tuple[tuple[int, TierName], ...] = (
    (3, TierName.sparse),
    (6, TierName.limited),
    (12, TierName.normal),
)


def tier_for_count(count: int) -> TierName:
    """Return the tier name for *count* candidates."""
    for upper, tier in _THRESHOLDS:
        if count <= upper:
            return tier
    return TierName.abundant


def _positive(value: int | None) -> int | None:
    if value is None or value <= 0:
        return None
    return value


def apply_override(base: DisplayStrategy, override: StrategyOverride, *, cap: bool) -> DisplayStrategy:
    """Shallow-merge *override* onto *base*.

    With ``cap`` the numeric limits can only lower the base's limits.
    """
    update: dict = {}

    max_featured = _positive(override.max_featured)
    if max_featured is not None:
        update["featured_count"] = min(max_featured, base.featured_count) if cap else max_featured

    max_grid = _positive(override.max_grid_items)
    if max_grid is not None:
        update["max_grid_items"] = min(max_grid, base.max_grid_items) if cap else max_grid

    if override.priority_rules is not None:
        update["priority_rules"] = tuple(override.priority_rules)
    if override.grid_columns is not None:
        update["grid_columns"] = override.grid_columns
    if override.show_filters is not None:
        update["show_filters"] = override.show_filters
    if override.show_view_all is not None:
        update["show_view_all"] = override.show_view_all

    return base.model_copy(update=update)


def select_strategy(count: int, override: StrategyOverride | None = None) -> DisplayStrategy:
    """Pick the display strategy for *count* vehicles, applying *override* if given."""
    if override is not None and override.force_tier is not None:
        strategy = apply_override(TIERS[override.force_tier], override, cap=False)
    else:
        base = TIERS[tier_for_count(count)]
        strategy = apply_override(base, override, cap=True) if override is not None else base.model_copy()

    logger.debug(
        "Selected %s strategy for %d vehicles (featured=%d, grid=%d)",
        strategy.name.value, count, strategy.featured_count, strategy.max_grid_items,
    )
    return strategy


def list_strategies() -> list[DisplayStrategy]:
    return [TIERS[tier] for tier in TierName]
