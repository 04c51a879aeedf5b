"""Tests for trigger scoring, the add-form draft and score helpers."""

import pytest

from stoneforged.models import DraftValidationError, Prospect, ProspectDraft
from stoneforged.scoring import (
    TRIGGER_OPTIONS,
    find_trigger,
    format_score,
    parse_score_override,
    readiness_band,
    score_for_trigger,
)


class TestTriggerOptions:
    """Test the trigger category table."""

    def test_order_and_bonuses(self):
        """Categories should be listed in form order with their bonuses."""
        assert [(o.value, o.bonus) for o in TRIGGER_OPTIONS] == [
            ("New R&D hire", 3),
            ("Facility expansion", 3),
            ("Reformulation", 4),
            ("New product launch", 3),
            ("New co-packer", 2),
            ("Funding round", 2),
            ("", 0),
        ]

    def test_custom_option_is_last(self):
        """Other / Custom should be the empty value at the end."""
        assert TRIGGER_OPTIONS[-1].label == "Other / Custom"
        assert TRIGGER_OPTIONS[-1].value == ""

    def test_find_trigger(self):
        """Lookup should be by value."""
        assert find_trigger("Reformulation").bonus == 4
        assert find_trigger("reformulation") is None
        assert find_trigger(None) is None


class TestScoreForTrigger:
    """Test base + bonus scoring."""

    @pytest.mark.parametrize("option", TRIGGER_OPTIONS, ids=lambda o: o.value or "custom")
    def test_score_is_base_plus_bonus(self, option):
        """Every category scores 5.0 plus its bonus."""
        assert score_for_trigger(option.value) == 5.0 + option.bonus

    def test_unknown_trigger_gets_base(self):
        """Free text that isn't a category scores the base 5.0."""
        assert score_for_trigger("Hired a new CMO") == 5.0
        assert score_for_trigger(None) == 5.0


class TestProspectDraft:
    """Test the add-prospect draft."""

    def test_defaults(self):
        """A fresh draft is blank with the base score."""
        draft = ProspectDraft()
        assert draft.brand == ""
        assert draft.trigger == ""
        assert draft.score == 5.0

    def test_select_trigger_sets_value_and_score(self):
        """Selecting a category fills trigger and score."""
        draft = ProspectDraft(brand="NightCalm").select_trigger("Reformulation")
        assert draft.trigger == "Reformulation"
        assert draft.score == 9.0
        assert draft.brand == "NightCalm"

    def test_select_custom_resets(self):
        """Other / Custom resets trigger to empty and score to 5.0."""
        draft = ProspectDraft().select_trigger("Funding round").select_trigger("")
        assert draft.trigger == ""
        assert draft.score == 5.0

    def test_score_stays_editable(self):
        """The auto-filled score can be overridden afterwards."""
        draft = ProspectDraft().select_trigger("New co-packer").with_score(6.5)
        assert draft.trigger == "New co-packer"
        assert draft.score == 6.5

    def test_select_trigger_returns_new_draft(self):
        """Transitions never modify the original draft."""
        original = ProspectDraft()
        original.select_trigger("Reformulation")
        assert original.score == 5.0

    @pytest.mark.parametrize("brand", ["", "   ", "\t"])
    def test_blank_brand_fails_validation(self, brand):
        """Brand is the only required field."""
        with pytest.raises(DraftValidationError, match="Brand is required"):
            ProspectDraft(brand=brand).validate()

    def test_valid_draft(self):
        """Only brand is checked; score range is not."""
        ProspectDraft(brand="X", score=42.0).validate()

    def test_payload(self):
        """Payload carries exactly the five writable fields."""
        payload = ProspectDraft(brand="A", trigger="B", score=7.0).to_payload()
        assert payload == {
            "brand": "A",
            "trigger": "B",
            "score": 7.0,
            "decision_maker": "",
            "next_action": "",
        }


class TestProspectFromDict:
    """Test building snapshots from API rows."""

    def test_full_row(self):
        """All fields should be read."""
        p = Prospect.from_dict({
            "id": 4, "brand": "VitalSleep", "trigger": "New R&D hire", "score": 9.2,
            "decision_maker": "R&D Director", "next_action": "Send sample",
        })
        assert p.id == 4
        assert p.score == 9.2
        assert p.next_action == "Send sample"

    def test_nulls_become_empty(self):
        """The service stores nulls; snapshots read them as blanks."""
        p = Prospect.from_dict({"id": 1, "brand": None, "trigger": None, "score": None})
        assert p.brand == ""
        assert p.trigger == ""
        assert p.decision_maker == ""
        assert p.score == 0.0

    def test_snapshot_is_immutable(self):
        """Snapshots are frozen."""
        p = Prospect(id=1, brand="A")
        with pytest.raises(AttributeError):
            p.brand = "B"


class TestReadiness:
    """Test readiness bands and score formatting."""

    @pytest.mark.parametrize("score,band", [
        (9.8, "high"),
        (8.0, "high"),
        (7.9, "medium"),
        (6.0, "medium"),
        (5.9, "low"),
        (0.0, "low"),
    ])
    def test_readiness_band(self, score, band):
        assert readiness_band(score) == band

    def test_format_score(self):
        """Scores display with one decimal."""
        assert format_score(9.2) == "9.2"
        assert format_score(8) == "8.0"

    @pytest.mark.parametrize("text,expected", [
        ("7.5", 7.5),
        (" 8 ", 8.0),
        ("0", 0.0),
        ("12", 12.0),  # not clamped
        ("", None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        (None, None),
    ])
    def test_parse_score_override(self, text, expected):
        """Only a usable number overrides the trigger score."""
        assert parse_score_override(text) == expected
