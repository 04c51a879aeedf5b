"""
Derived views over a prospect snapshot: search filter, column sort, stats.

Every function here is pure. Inputs are never mutated and results are new
tuples, so a view can be recomputed whenever the snapshot, the search term
or the sort selection changes.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from .constants import HIGH_READINESS_THRESHOLD, SEARCHABLE_FIELDS, SORTABLE_FIELDS
from .models import Prospect

ASC = "asc"
DESC = "desc"

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class SortConfig:
    """Active column sort."""

    key: str
    direction: str = ASC

    def __post_init__(self):
        if self.key not in SORTABLE_FIELDS:
            raise ValueError(f"Unknown sort key: {self.key}")
        if self.direction not in (ASC, DESC):
            raise ValueError(f"Unknown sort direction: {self.direction}")


@dataclass(frozen=True)
class ProspectStats:
    """Aggregate statistics over the full prospect list."""

    total: int
    high_readiness: int
    average_score: float
    average_display: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "high_readiness": self.high_readiness,
            "average_score": self.average_score,
            "average_display": self.average_display,
        }


def filter_prospects(prospects: Iterable[Prospect], term: Optional[str]) -> tuple[Prospect, ...]:
    """
    Filter prospects by a free-text search term.

    Matching is a case-insensitive substring test against brand, trigger,
    decision maker and next action. A blank term keeps everything.

    Args:
        prospects: Prospect snapshot
        term: Search box contents

    Returns:
        Matching prospects in their original order
    """
    prospects = tuple(prospects)
    needle = (term or "").strip().lower()
    if not needle:
        return prospects

    return tuple(
        p for p in prospects
        if any(needle in (getattr(p, name) or "").lower() for name in SEARCHABLE_FIELDS)
    )


def request_sort(current: Optional[SortConfig], key: str) -> SortConfig:
    """
    Work out the sort after a column header click.

    Clicking the ascending column flips it to descending. Any other click
    (new column, first click, or the descending column) sorts ascending.
    """
    if current is not None and current.key == key and current.direction == ASC:
        return SortConfig(key, DESC)
    return SortConfig(key, ASC)


def sort_prospects(
    prospects: Iterable[Prospect],
    sort_config: Optional[SortConfig],
) -> tuple[Prospect, ...]:
    """
    Order prospects by a column.

    Uses the field's natural ordering. Equal values keep their relative
    order in both directions. With no sort selected the input order (score
    descending, as served) is kept.
    """
    prospects = tuple(prospects)
    if sort_config is None:
        return prospects

    return tuple(sorted(
        prospects,
        key=lambda p: getattr(p, sort_config.key),
        reverse=sort_config.direction == DESC,
    ))


def sort_indicator(sort_config: Optional[SortConfig], key: str) -> str:
    """Arrow suffix for a column header."""
    if sort_config is None or sort_config.key != key:
        return ""
    return " ↑" if sort_config.direction == ASC else " ↓"


def average_score(prospects: Iterable[Prospect]) -> Decimal:
    """
    Mean score rounded half-up to one decimal place.

    Scores are summed as decimals of their shortest repr: 9.2 and 8.7
    average to 8.95, which displays as 9.0.
    """
    scores = [Decimal(str(p.score)) for p in prospects]
    if not scores:
        return Decimal("0.0")
    mean = sum(scores) / len(scores)
    return mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def compute_stats(prospects: Iterable[Prospect]) -> ProspectStats:
    """Aggregate stats for the stat cards. Pass the full, unfiltered list."""
    prospects = tuple(prospects)
    avg = average_score(prospects)
    return ProspectStats(
        total=len(prospects),
        high_readiness=sum(1 for p in prospects if p.score >= HIGH_READINESS_THRESHOLD),
        average_score=float(avg),
        average_display=f"{avg:.1f}",
    )
