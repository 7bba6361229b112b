from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TierName(str, Enum):
    sparse = "sparse"
    limited = "limited"
    normal = "normal"
    abundant = "abundant"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class RawVehicle(BaseModel):
    """A search result as returned by the listings API."""

    model_config = ConfigDict(frozen=True)

    id: str
    make: str = ""
    model: str = ""
    year: int | None = None
    type: str | None = None
    price_per_day: float
    city: str | None = None
    rating: float | None = Field(default=None, description="0 or missing means no reviews yet")
    review_count: int | None = None
    total_bookings: int | None = None
    photo_url: str | None = None


class NormalizedVehicle(RawVehicle):
    has_photo: bool
    has_rating: bool
    is_popular: bool
    display_rating: float = Field(ge=0.0, le=5.0)
    display_bookings: int = Field(ge=0)
    used_fallback: bool


class PriorityRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.desc
    weight: int = Field(default=5, ge=1, le=10)


class GridColumns(BaseModel):
    model_config = ConfigDict(frozen=True)

    mobile: int = Field(default=1, ge=1)
    tablet: int = Field(default=2, ge=1)
    desktop: int = Field(default=3, ge=1)


class DisplayStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: TierName
    featured_count: int
    max_grid_items: int
    grid_columns: GridColumns = Field(default_factory=GridColumns)
    show_filters: bool
    show_view_all: bool
    priority_rules: tuple[PriorityRule, ...] = ()


class StrategyOverride(BaseModel):
    """Caller-supplied adjustments merged onto a tier.

    With ``force_tier`` the limits replace the tier's own; otherwise they can
    only narrow the auto-selected tier.
    """

    force_tier: TierName | None = None
    priority_rules: list[PriorityRule] | None = None
    max_featured: int | None = None
    max_grid_items: int | None = None
    grid_columns: GridColumns | None = None
    show_filters: bool | None = None
    show_view_all: bool | None = None


class Distribution(BaseModel):
    featured: list[NormalizedVehicle] = Field(default_factory=list)
    grid: list[NormalizedVehicle] = Field(default_factory=list)
    hidden: list[NormalizedVehicle] = Field(default_factory=list)
    total: int = 0
    strategy: DisplayStrategy

    @property
    def show_filters(self) -> bool:
        return self.strategy.show_filters

    @property
    def show_view_all(self) -> bool:
        return self.strategy.show_view_all and len(self.hidden) > 0


class DisplayHints(BaseModel):
    title: str
    subtitle: str
    badge: str
    show_promotional_banner: bool = False
    show_empty_state: bool = False


class DisplayStats(BaseModel):
    total: int
    featured: int
    grid: int
    hidden: int
    has_fallbacks: bool


class EmptyState(BaseModel):
    title: str
    subtitle: str
    show_actions: bool = True
    is_demo_mode: bool = False


# ── API payloads ─────────────────────────────────────────────────────────


class ShowcaseRequest(BaseModel):
    vehicles: list[RawVehicle] = Field(default_factory=list)
    display_options: StrategyOverride | None = None
    vehicle_type: str | None = Field(default=None, description="e.g. SUV, BERLINE, PICKUP")
    city: str | None = None


class ShowcaseResponse(BaseModel):
    distribution: Distribution
    hints: DisplayHints
    stats: DisplayStats
    show_filters: bool
    show_view_all: bool
    grid_classes: str
    discarded: int = 0
    empty_state: EmptyState | None = None


class StrategySelectRequest(BaseModel):
    count: int = Field(..., ge=0)
    override: StrategyOverride | None = None
