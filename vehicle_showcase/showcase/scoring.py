"""Rank score for a normalized vehicle under a list of priority rules."""
from __future__ import annotations

import math
from typing import Callable, Iterable

from .models import NormalizedVehicle, PriorityRule, SortDirection

BOOKINGS_CAP = 20
PRICE_CEILING = 100_000.0


def _flag(attr: str) -> Callable[[NormalizedVehicle], float]:
    return lambda vehicle: 1.0 if getattr(vehicle, attr) else 0.0


def _rating(vehicle: NormalizedVehicle) -> float:
    return vehicle.display_rating / 5.0


def _bookings(vehicle: NormalizedVehicle) -> float:
    # Rewards flatten out above BOOKINGS_CAP rentals.
    return min(vehicle.display_bookings, BOOKINGS_CAP) / BOOKINGS_CAP


def _price(vehicle: NormalizedVehicle) -> float:
    # Cheaper is better; anything at or above the ceiling contributes nothing.
    if not math.isfinite(vehicle.price_per_day):
        return 0.0
    value = 1.0 - vehicle.price_per_day / PRICE_CEILING
    return max(0.0, min(1.0, value))


FIELD_NORMALIZERS: dict[str, Callable[[NormalizedVehicle], float]] = {
    "has_photo": _flag("has_photo"),
    "is_popular": _flag("is_popular"),
    "used_fallback": _flag("used_fallback"),
    "rating": _rating,
    "total_bookings": _bookings,
    "price_per_day": _price,
}


def normalized_value(vehicle: NormalizedVehicle, field: str) -> float:
    """Return *field* of *vehicle* scaled to [0, 1]; unknown fields give 0."""
    normalizer = FIELD_NORMALIZERS.get(field)
    if normalizer is None:
        return 0.0
    return normalizer(vehicle)


def rule_contribution(vehicle: NormalizedVehicle, rule: PriorityRule) -> float:
    """Weighted contribution of one rule; rules on unknown fields are a no-op."""
    if rule.field not in FIELD_NORMALIZERS:
        return 0.0
    value = normalized_value(vehicle, rule.field)
    if rule.direction == SortDirection.desc:
        return value * rule.weight
    return (1.0 - value) * rule.weight


def score(vehicle: NormalizedVehicle, rules: Iterable[PriorityRule]) -> float:
    """
    Sum the weighted, direction-adjusted contribution of every rule.

    The total is unbounded; only the relative order between vehicles matters.
    """
    return sum(rule_contribution(vehicle, rule) for rule in rules)
