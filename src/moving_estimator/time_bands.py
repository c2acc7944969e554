from __future__ import annotations

from datetime import datetime, time
from typing import Iterable

from .models.cargo import TimeBandSurcharge


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string."""
    try:
        hours, minutes = value.strip().split(":")
        return time(hour=int(hours), minute=int(minutes))
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid clock value: {value!r}") from exc


def is_surcharge_active(surcharge: TimeBandSurcharge, at: time | datetime) -> bool:
    """Whether ``at`` falls inside the half-open window ``[start, end)``.

    Windows whose end precedes their start run past midnight. A window with
    equal start and end never matches.
    """
    if isinstance(at, datetime):
        at = at.time()
    at = at.replace(second=0, microsecond=0, tzinfo=None)
    start = parse_clock(surcharge.start)
    end = parse_clock(surcharge.end)
    if start < end:
        return start <= at < end
    if start > end:
        return at >= start or at < end
    return False


def select_applicable_surcharges(
    surcharges: Iterable[TimeBandSurcharge],
    at: time | datetime,
) -> list[TimeBandSurcharge]:
    return [surcharge for surcharge in surcharges if is_surcharge_active(surcharge, at)]


__all__ = ["parse_clock", "is_surcharge_active", "select_applicable_surcharges"]
