from __future__ import annotations

from typing import Sequence

from .models import DisplayStrategy, Distribution, NormalizedVehicle
from .scoring import score


def rank(vehicles: Sequence[NormalizedVehicle], strategy: DisplayStrategy) -> list[NormalizedVehicle]:
    """Return *vehicles* ordered by score, highest first.

    Equal scores keep their input order: the position is part of the sort key
    so the result does not depend on the sort being stable.
    """
    scored = [
        (score(vehicle, strategy.priority_rules), position, vehicle)
        for position, vehicle in enumerate(vehicles)
    ]
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [vehicle for _, _, vehicle in scored]


def distribute(vehicles: Sequence[NormalizedVehicle], strategy: DisplayStrategy) -> Distribution:
    """Split the ranked vehicles into featured, grid and hidden slices."""
    ranked = rank(vehicles, strategy)

    featured_count = max(0, strategy.featured_count)
    grid_end = featured_count + max(0, strategy.max_grid_items)

    return Distribution(
        featured=ranked[:featured_count],
        grid=ranked[featured_count:grid_end],
        hidden=ranked[grid_end:],
        total=len(ranked),
        strategy=strategy,
    )
