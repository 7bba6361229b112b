from __future__ import annotations

import math
from typing import Iterable

from .models import NormalizedVehicle, RawVehicle

DEFAULT_POPULARITY_THRESHOLD = 5
MAX_RATING = 5.0


def _finite(value: float | int | None) -> float:
    """Return *value* as a float, or 0.0 when it is missing or not a finite number."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def normalize(
    raw: RawVehicle,
    popularity_threshold: int = DEFAULT_POPULARITY_THRESHOLD,
) -> NormalizedVehicle:
    """Derive display flags for one vehicle.

    A missing photo, a zero/missing rating or a zero/missing booking count
    means the data is not available yet; the vehicle is kept and flagged
    with ``used_fallback``.
    """
    has_photo = bool(raw.photo_url and raw.photo_url.strip())
    rating = _finite(raw.rating)
    bookings = int(max(0.0, _finite(raw.total_bookings)))

    return NormalizedVehicle(
        **raw.model_dump(include=set(RawVehicle.model_fields)),
        has_photo=has_photo,
        has_rating=rating > 0,
        is_popular=bookings >= popularity_threshold,
        display_rating=max(0.0, min(MAX_RATING, rating)),
        display_bookings=bookings,
        used_fallback=not has_photo or rating <= 0 or bookings == 0,
    )


def normalize_all(
    raws: Iterable[RawVehicle],
    popularity_threshold: int = DEFAULT_POPULARITY_THRESHOLD,
) -> list[NormalizedVehicle]:
    return [normalize(raw, popularity_threshold) for raw in raws]
