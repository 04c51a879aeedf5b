"""Trigger categories and the score each one implies."""

from typing import NamedTuple, Optional

from ..constants import BASE_SCORE


class TriggerOption(NamedTuple):
    """A selectable trigger category."""

    label: str
    value: str
    bonus: int


# Order matters: this is the order the add form lists them in
TRIGGER_OPTIONS = (
    TriggerOption("New R&D hire / Formulation Specialist", "New R&D hire", 3),
    TriggerOption("Facility / Line expansion", "Facility expansion", 3),
    TriggerOption("Reformulation / Ingredient change", "Reformulation", 4),
    TriggerOption("New product launch (sleep/energy/functional)", "New product launch", 3),
    TriggerOption("New co-packer partnership", "New co-packer", 2),
    TriggerOption("Funding round / Investment", "Funding round", 2),
    TriggerOption("Other / Custom", "", 0),
)

_BY_VALUE = {option.value: option for option in TRIGGER_OPTIONS}


def find_trigger(value: Optional[str]) -> Optional[TriggerOption]:
    """Look up a trigger category by its value. Returns None if unknown."""
    if value is None:
        return None
    return _BY_VALUE.get(value)


def score_for_trigger(value: Optional[str]) -> float:
    """
    Calculate the default readiness score for a trigger.

    Base readiness plus the category bonus. Free-text triggers that don't
    match a category get the base score.

    Args:
        value: Trigger category value

    Returns:
        Suggested score (5.0 - 9.0)
    """
    option = find_trigger(value)
    bonus = option.bonus if option else 0
    return BASE_SCORE + bonus
