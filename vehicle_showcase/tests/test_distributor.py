from __future__ import annotations

import pytest

from vehicle_showcase.showcase.distributor import distribute, rank
from vehicle_showcase.showcase.models import (
    DisplayStrategy,
    NormalizedVehicle,
    PriorityRule,
    RawVehicle,
    SortDirection,
    TierName,
)
from vehicle_showcase.showcase.normalizer import normalize, normalize_all
from vehicle_showcase.showcase.strategies import TIERS, select_strategy


def _raw(i: int, **overrides) -> RawVehicle:
    data = {
        "id": f"v-{i}",
        "make": "Toyota",
        "model": "Corolla",
        "type": "BERLINE",
        "price_per_day": 20000 + i * 1000,
        "city": "Dakar",
        "rating": 4.0,
        "total_bookings": 6,
        "photo_url": f"https://cdn.example.com/{i}.jpg",
    }
    data.update(overrides)
    return RawVehicle(**data)


def _fleet(n: int) -> list[NormalizedVehicle]:
    return normalize_all(_raw(i, rating=3.0 + (i % 5) * 0.4, total_bookings=i % 9) for i in range(n))


def _ids(vehicles) -> list[str]:
    return [v.id for v in vehicles]


@pytest.mark.parametrize("n", [0, 1, 3, 4, 6, 7, 12, 13, 14, 20, 41])
def test_partition_is_complete_and_bounded(n):
    vehicles = _fleet(n)
    strategy = select_strategy(n)
    dist = distribute(vehicles, strategy)

    assert len(dist.featured) + len(dist.grid) + len(dist.hidden) == dist.total == n
    assert len(dist.featured) <= strategy.featured_count
    assert len(dist.grid) <= strategy.max_grid_items

    all_ids = _ids(dist.featured) + _ids(dist.grid) + _ids(dist.hidden)
    assert len(set(all_ids)) == n
    assert set(all_ids) == set(_ids(vehicles))


def test_empty_input_is_not_an_error():
    dist = distribute([], TIERS[TierName.abundant])
    assert dist.featured == []
    assert dist.grid == []
    assert dist.hidden == []
    assert dist.total == 0
    assert dist.show_view_all is False


def test_higher_rating_ranks_first():
    rules = (PriorityRule(field="rating", direction=SortDirection.desc, weight=5),)
    strategy = TIERS[TierName.sparse].model_copy(update={"priority_rules": rules})
    low = normalize(_raw(1, rating=3.0))
    high = normalize(_raw(2, rating=4.8))

    dist = distribute([low, high], strategy)

    assert _ids(dist.featured) == ["v-2"]
    assert _ids(dist.grid) == ["v-1"]


def test_equal_scores_keep_input_order():
    vehicles = normalize_all(_raw(i, price_per_day=30000) for i in (5, 2, 9, 1))
    ranked = rank(vehicles, TIERS[TierName.normal])
    assert _ids(ranked) == ["v-5", "v-2", "v-9", "v-1"]


def test_distribution_is_deterministic():
    vehicles = _fleet(20)
    strategy = select_strategy(20)
    first = distribute(vehicles, strategy)
    second = distribute(vehicles, strategy)
    assert first.model_dump() == second.model_dump()


def test_input_list_is_not_reordered():
    vehicles = _fleet(10)
    before = _ids(vehicles)
    distribute(vehicles, select_strategy(10))
    assert _ids(vehicles) == before


def test_abundant_ranks_real_listing_above_fallback():
    # Same listing twice, only the fallback marker differs; fallback given first.
    base = normalize(_raw(1))
    fallback = NormalizedVehicle(**{**base.model_dump(), "id": "fallback", "used_fallback": True})
    real = NormalizedVehicle(**{**base.model_dump(), "id": "real"})

    ranked = rank([fallback, real], TIERS[TierName.abundant])

    assert _ids(ranked) == ["real", "fallback"]


def test_negative_limits_are_treated_as_zero():
    strategy = DisplayStrategy(
        name=TierName.normal,
        featured_count=-1,
        max_grid_items=-4,
        show_filters=True,
        show_view_all=True,
    )
    dist = distribute(_fleet(5), strategy)
    assert dist.featured == []
    assert dist.grid == []
    assert len(dist.hidden) == 5


class TestScenarios:
    def test_fourteen_listings_with_two_incomplete(self):
        raws = [_raw(i) for i in range(12)]
        raws += [_raw(12, photo_url=None, rating=0), _raw(13, photo_url=None, rating=0)]
        vehicles = normalize_all(raws)

        strategy = select_strategy(len(vehicles))
        dist = distribute(vehicles, strategy)

        assert strategy.name is TierName.abundant
        assert (strategy.featured_count, strategy.max_grid_items) == (2, 12)
        assert len(dist.featured) == 2
        assert len(dist.grid) == 12
        assert dist.hidden == []
        assert dist.show_view_all is False
        assert set(_ids(dist.grid[-2:])) == {"v-12", "v-13"}

    def test_twenty_listings(self):
        vehicles = _fleet(20)
        strategy = select_strategy(20)
        dist = distribute(vehicles, strategy)

        assert strategy.name is TierName.abundant
        assert len(dist.featured) == 2
        assert len(dist.grid) == 12
        assert len(dist.hidden) == 6
        assert dist.show_view_all is True
        assert dist.show_filters is True
