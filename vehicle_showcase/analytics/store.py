"""In-process event log, bucketed by event type.

``build_showcase`` writes one ``SHOWCASE_EVENT`` per call; ``/analytics``
reads that bucket back for aggregation.
"""
from __future__ import annotations

import time
from collections import defaultdict
from typing import Any

SHOWCASE_EVENT = "showcase"

_events: defaultdict[str, list[dict[str, Any]]] = defaultdict(list)


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events[event_type].append({"type": event_type, "timestamp": time.time(), **data})


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    """Events of *event_type*, or every event ordered by timestamp when it is None."""
    if event_type is not None:
        return list(_events.get(event_type, ()))
    return sorted((e for bucket in _events.values() for e in bucket), key=lambda e: e["timestamp"])


def clear_events() -> None:
    _events.clear()
