"""
StoneForged-Intel - Prospect readiness dashboard.

Track brands showing buying triggers, score how ready they are to engage,
and export the hot list for outreach.

CLI Usage:
    stoneforged serve                  # Start the API and dashboard
    stoneforged seed                   # Load the example prospects
    stoneforged list -q sleep --sort score --desc
    stoneforged export -o hot.csv

Library Usage:
    from stoneforged import ProspectDashboard, ProspectAPIClient

    with ProspectAPIClient() as client:
        dashboard = ProspectDashboard(client)
        dashboard.load()
        dashboard.search_term = "sleep"
        for p in dashboard.visible:
            print(f"{p.brand}: {p.score}")
"""

__version__ = "0.6.0"
__author__ = "StoneForged"

# Semantic versioning
# MAJOR.MINOR.PATCH
VERSION_INFO = {
    "major": 0,
    "minor": 6,
    "patch": 0,
    "release": "stable",  # stable, beta, alpha
}


def get_version() -> str:
    """Get full version string."""
    version = f"{VERSION_INFO['major']}.{VERSION_INFO['minor']}.{VERSION_INFO['patch']}"
    if VERSION_INFO["release"] != "stable":
        version += f"-{VERSION_INFO['release']}"
    return version


from stoneforged.models import Prospect, ProspectDraft
from stoneforged.client import ProspectAPIClient, ProspectAPIError
from stoneforged.dashboard import ProspectDashboard

__all__ = [
    "Prospect",
    "ProspectDraft",
    "ProspectAPIClient",
    "ProspectAPIError",
    "ProspectDashboard",
    "__version__",
    "get_version",
    "VERSION_INFO",
]
