"""Scoring module for prospect readiness."""

from .triggers import TRIGGER_OPTIONS, TriggerOption, find_trigger, score_for_trigger
from .readiness import format_score, parse_score_override, readiness_band

__all__ = [
    "TRIGGER_OPTIONS",
    "TriggerOption",
    "find_trigger",
    "score_for_trigger",
    "format_score",
    "parse_score_override",
    "readiness_band",
]
