from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ShowcaseConfig:
    popularity_threshold: int = _env_int("SHOWCASE_POPULARITY_THRESHOLD", 5)
    cache_ttl_seconds: int = _env_int("SHOWCASE_CACHE_TTL", 300)
    cache_max_entries: int = _env_int("SHOWCASE_CACHE_MAX_ENTRIES", 256)
    demo_fleet_path: Path = Path(__file__).resolve().parent.parent / "data" / "demo_fleet.csv"
    demo_mode: bool = os.getenv("SHOWCASE_DEMO_MODE", "true").lower() in ("1", "true", "yes")


DEFAULT_SHOWCASE_CONFIG = ShowcaseConfig()
