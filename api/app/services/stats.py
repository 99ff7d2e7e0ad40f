from __future__ import annotations

"""Feedback aggregation and Net Promoter Score computation.

Every dashboard number is produced by :func:`summarize`. Rounding is half away
from zero on exact decimal values, so a category mean of 3.25 becomes 3.3 and
an NPS of -12.5 becomes -13 regardless of binary float representation.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol

from ..errors import ValidationError
from ..schemas import StatsSummary

PROMOTER_MIN = 9
PASSIVE_MIN = 7
# A century; larger windows would start before datetime.min
MAX_WINDOW_DAYS = 36500

_ONE = Decimal("1")
_TENTH = Decimal("0.1")


class Scored(Protocol):
    nps_score: int
    rating_food: int
    rating_service: int
    rating_wait_time: int
    rating_ambiance: int


def classify(score: int) -> str:
    """Return ``promoter``, ``passive`` or ``detractor`` for a 0-10 score."""
    if score >= PROMOTER_MIN:
        return "promoter"
    if score >= PASSIVE_MIN:
        return "passive"
    return "detractor"


def round_half_away(value: Decimal, places: Decimal = _ONE) -> Decimal:
    return value.quantize(places, rounding=ROUND_HALF_UP)


def nps(promoters: int, detractors: int, total: int) -> int:
    """Return ``round((promoters - detractors) / total * 100)``; 0 when empty."""
    if total == 0:
        return 0
    value = Decimal(promoters - detractors) * 100 / Decimal(total)
    return int(round_half_away(value))


def mean_one_decimal(values: list[int]) -> float:
    """Arithmetic mean rounded to one fractional digit; 0.0 when empty."""
    if not values:
        return 0.0
    value = Decimal(sum(values)) / Decimal(len(values))
    return float(round_half_away(value, _TENTH))


def summarize(records: Iterable[Scored]) -> StatsSummary:
    """Aggregate ``records`` into a :class:`StatsSummary`.

    The input is only iterated, never modified; the result does not depend on
    record order.
    """

    rows = list(records)
    total = len(rows)
    if total == 0:
        return StatsSummary()

    buckets = {"promoter": 0, "passive": 0, "detractor": 0}
    for row in rows:
        buckets[classify(row.nps_score)] += 1

    return StatsSummary(
        total_feedbacks=total,
        nps_score=nps(buckets["promoter"], buckets["detractor"], total),
        avg_food=mean_one_decimal([r.rating_food for r in rows]),
        avg_service=mean_one_decimal([r.rating_service for r in rows]),
        avg_wait_time=mean_one_decimal([r.rating_wait_time for r in rows]),
        avg_ambiance=mean_one_decimal([r.rating_ambiance for r in rows]),
        promoters=buckets["promoter"],
        passives=buckets["passive"],
        detractors=buckets["detractor"],
    )


def parse_days(raw: str | int | None) -> int | None:
    """Validate the ``days`` window parameter.

    ``None`` or an empty string means no window. Anything else must be a
    positive integer.
    """

    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError("days", "days must be a positive integer")
    if isinstance(raw, int):
        days = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("days", "days must be a positive integer")
        days = int(text)
    if days <= 0:
        raise ValidationError("days", "days must be a positive integer")
    if days > MAX_WINDOW_DAYS:
        raise ValidationError("days", f"days must be at most {MAX_WINDOW_DAYS}")
    return days


def window_start(days: int | None, now: datetime) -> datetime | None:
    """Return the inclusive lower bound for a ``days`` window ending at ``now``."""
    if days is None:
        return None
    return now - timedelta(days=days)


def in_window(created_at: datetime, since: datetime | None) -> bool:
    return since is None or created_at >= since


__all__ = [
    "classify",
    "nps",
    "mean_one_decimal",
    "summarize",
    "parse_days",
    "window_start",
    "in_window",
]
