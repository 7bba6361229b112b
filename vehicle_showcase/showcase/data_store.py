from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .config import DEFAULT_SHOWCASE_CONFIG
from .models import RawVehicle

logger = logging.getLogger(__name__)

FLEET_COLUMNS = [
    "id",
    "make",
    "model",
    "year",
    "type",
    "price_per_day",
    "city",
    "rating",
    "review_count",
    "total_bookings",
    "photo_url",
]

_df: pd.DataFrame | None = None
_fleet: list[RawVehicle] | None = None


def _load(path: Path) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, dtype={"id": str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError):
        logger.warning("Demo fleet unavailable at %s, serving an empty fleet", path, exc_info=True)
        return pd.DataFrame(columns=FLEET_COLUMNS)

    for col in FLEET_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    df["type"] = df["type"].fillna("").str.upper()
    return df


def get_fleet_frame() -> pd.DataFrame:
    """Return the demo fleet DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = _load(DEFAULT_SHOWCASE_CONFIG.demo_fleet_path)
    return _df


def _row_to_vehicle(row: dict) -> RawVehicle:
    # NaN cells become None so optional fields read as "not available".
    clean = {k: (None if pd.isna(v) else v) for k, v in row.items() if k in FLEET_COLUMNS}
    for col in ("year", "review_count", "total_bookings"):
        if clean.get(col) is not None:
            clean[col] = int(clean[col])
    return RawVehicle(**clean)


def get_demo_fleet() -> list[RawVehicle]:
    """Return the demo fleet as raw vehicles, in file order."""
    global _fleet
    if _fleet is None:
        df = get_fleet_frame()
        _fleet = [_row_to_vehicle(row) for row in df[FLEET_COLUMNS].to_dict(orient="records")]
    return _fleet
