"""
Shared constants: scoring thresholds, export layout, seed rows and UI text.
"""

# Readiness every new prospect starts from before any trigger bonus
BASE_SCORE = 5.0

# Score at or above which a prospect counts as "high readiness"
HIGH_READINESS_THRESHOLD = 8.0

# Score at or above which a prospect is "medium" (below is "low")
MEDIUM_READINESS_THRESHOLD = 6.0

# Fields a view can be sorted by
SORTABLE_FIELDS = ("id", "brand", "trigger", "score", "decision_maker", "next_action")

# Fields the search box matches against
SEARCHABLE_FIELDS = ("brand", "trigger", "decision_maker", "next_action")

# CSV export header, in column order
CSV_HEADERS = ["Brand", "Trigger", "Score", "Decision Maker", "Next Action"]

CSV_FILENAME_PREFIX = "stoneforged-prospects"

# Example rows inserted by the seed endpoint. Fixed ids keep re-seeding idempotent.
SEED_PROSPECTS = [
    {
        "id": 1,
        "brand": "VitalSleep",
        "trigger": "New R&D hire",
        "score": 9.2,
        "decision_maker": "R&D Director",
        "next_action": "Send sample",
    },
    {
        "id": 2,
        "brand": "EnergyBoost",
        "trigger": "Facility expansion",
        "score": 8.7,
        "decision_maker": "Innovation Manager",
        "next_action": "Technical call",
    },
    {
        "id": 3,
        "brand": "PureRest",
        "trigger": "Reformulation announced",
        "score": 9.8,
        "decision_maker": "Formulation Lead",
        "next_action": "Personalized message",
    },
]


# Response header carrying how many example rows /api/seed inserted
SEEDED_COUNT_HEADER = "X-Seeded-Count"


# UI labels
LABELS = {
    "title": "StoneForged-Intel",
    "subtitle": "12-Week Intelligence Playbook Dashboard",
    "total": "TOTAL PROSPECTS",
    "high_readiness": "HIGH READINESS",
    "avg_score": "AVG SCORE",
    "search_placeholder": "Search brand, trigger, person...",
    "trigger_placeholder": "Select Trigger (auto-scores)",
}


# User-facing messages
MESSAGES = {
    "brand_required": "Brand is required",
    "nothing_to_export": "No prospects to export",
    "no_matches": "No matches found",
    "no_prospects": "No prospects yet — add one!",
    "seeded": "Examples added!",
    "nothing_seeded": "No new examples added",
    "backend_unavailable": "Backend not ready",
}
