from __future__ import annotations

from .models import (
    DisplayHints,
    DisplayStats,
    DisplayStrategy,
    Distribution,
    EmptyState,
    TierName,
)


def generate_hints(strategy: DisplayStrategy, count: int) -> DisplayHints:
    """Return the section title, subtitle and badge for *strategy* and *count* vehicles."""
    name = strategy.name
    show_empty_state = count == 0

    if name is TierName.sparse:
        return DisplayHints(
            title="Our pick" if count == 1 else "Our best deals",
            subtitle=(
                "Discover the vehicles available right now"
                if count <= 2
                else "A selection picked for you"
            ),
            badge="Premium selection",
            show_empty_state=show_empty_state,
        )
    if name is TierName.limited:
        return DisplayHints(
            title="Available vehicles",
            subtitle=f"{count} verified vehicles available now",
            badge="Available now",
            show_promotional_banner=count <= 4,
            show_empty_state=show_empty_state,
        )
    if name is TierName.normal:
        return DisplayHints(
            title="Available vehicles",
            subtitle=f"Discover our selection of {count} verified vehicles",
            badge="Today's selection",
            show_empty_state=show_empty_state,
        )
    if name is TierName.abundant:
        return DisplayHints(
            title="A wide selection of vehicles",
            subtitle=f"More than {count} verified vehicles available across Senegal",
            badge="Wide selection",
            show_empty_state=show_empty_state,
        )
    raise AssertionError(f"unhandled tier: {name!r}")


def display_stats(distribution: Distribution) -> DisplayStats:
    vehicles = [*distribution.featured, *distribution.grid, *distribution.hidden]
    return DisplayStats(
        total=distribution.total,
        featured=len(distribution.featured),
        grid=len(distribution.grid),
        hidden=len(distribution.hidden),
        has_fallbacks=any(v.used_fallback for v in vehicles),
    )


def grid_classes(strategy: DisplayStrategy) -> str:
    """Tailwind grid classes for the strategy's column layout."""
    columns = strategy.grid_columns
    return (
        f"grid gap-5 grid-cols-{columns.mobile} "
        f"sm:grid-cols-{columns.tablet} lg:grid-cols-{columns.desktop}"
    )


def empty_state(has_attempted_load: bool, demo_mode: bool) -> EmptyState:
    if demo_mode and not has_attempted_load:
        return EmptyState(
            title="Loading the fleet...",
            subtitle="We are preparing the best offers for you",
            is_demo_mode=True,
        )
    return EmptyState(
        title="Coming soon",
        subtitle="Our fleet of verified vehicles will be listed here very soon",
    )
