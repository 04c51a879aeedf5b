"""Readiness score display and input helpers."""

import math
from typing import Optional

from ..constants import HIGH_READINESS_THRESHOLD, MEDIUM_READINESS_THRESHOLD


def readiness_band(score: float) -> str:
    """Bucket a score into high / medium / low readiness."""
    if score >= HIGH_READINESS_THRESHOLD:
        return "high"
    if score >= MEDIUM_READINESS_THRESHOLD:
        return "medium"
    return "low"


def format_score(score: float) -> str:
    return f"{score:.1f}"


def parse_score_override(text: Optional[str]) -> Optional[float]:
    """
    The score typed into the add form, or None if there isn't a usable one.

    Blank, unparseable and non-finite input all give None. The value is
    not clamped: out-of-range scores are accepted as typed.
    """
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value
