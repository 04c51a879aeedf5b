"""Data models for prospects and the add-prospect draft."""

from dataclasses import dataclass, replace, asdict
from typing import Any, Optional

from .constants import BASE_SCORE, MESSAGES
from .scoring.triggers import find_trigger, score_for_trigger


class DraftValidationError(ValueError):
    """Raised when a draft cannot be submitted."""
    pass


@dataclass(frozen=True)
class Prospect:
    """A tracked sales lead, as returned by the prospects service."""

    id: int
    brand: str = ""
    trigger: str = ""
    score: float = 0.0
    decision_maker: str = ""
    next_action: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Prospect":
        """
        Build a prospect from an API row.

        The service stores whatever it is given, so text columns may come
        back as null; they are read as empty strings and a null score as 0.
        """
        score = data.get("score")
        return cls(
            id=int(data["id"]),
            brand=data.get("brand") or "",
            trigger=data.get("trigger") or "",
            score=float(score) if score is not None else 0.0,
            decision_maker=data.get("decision_maker") or "",
            next_action=data.get("next_action") or "",
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class ProspectDraft:
    """State of the add-prospect form before it is submitted."""

    brand: str = ""
    trigger: str = ""
    score: float = BASE_SCORE
    decision_maker: str = ""
    next_action: str = ""

    def select_trigger(self, value: Optional[str]) -> "ProspectDraft":
        """Pick a trigger category; auto-fills the score from its bonus."""
        option = find_trigger(value)
        return replace(
            self,
            trigger=option.value if option else "",
            score=score_for_trigger(value),
        )

    def with_score(self, score: float) -> "ProspectDraft":
        return replace(self, score=score)

    def update(self, **changes) -> "ProspectDraft":
        return replace(self, **changes)

    def validate(self) -> None:
        """Raise DraftValidationError if the draft can't be saved."""
        if not self.brand.strip():
            raise DraftValidationError(MESSAGES["brand_required"])

    def to_payload(self) -> dict:
        """Request body for POST /api/prospects."""
        return asdict(self)
