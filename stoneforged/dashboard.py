"""
Client-side dashboard session.

Holds the last fetched prospect list plus the search term and sort the user
has picked. Views are derived from that snapshot on every access; mutations
go to the service and are always followed by a full reload.
"""

import logging
from datetime import date
from typing import Optional, Sequence

from .client import ProspectAPIClient, ProspectAPIError
from .constants import MESSAGES
from .export import export_csv_string, export_filename, select_export_rows
from .models import Prospect, ProspectDraft
from .views import (
    ProspectStats,
    SortConfig,
    compute_stats,
    filter_prospects,
    request_sort,
    sort_indicator,
    sort_prospects,
)

logger = logging.getLogger(__name__)


class ProspectDashboard:
    """Cached prospect list with search, sort and stats."""

    def __init__(self, client: ProspectAPIClient):
        self.client = client
        self.prospects: tuple[Prospect, ...] = ()
        self.search_term: str = ""
        self.sort_config: Optional[SortConfig] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> tuple[Prospect, ...]:
        """
        Fetch the full list from the service.

        A failed fetch is logged and the previous snapshot is kept.
        """
        try:
            self.prospects = tuple(self.client.list_prospects())
        except ProspectAPIError as e:
            logger.warning("%s: %s", MESSAGES["backend_unavailable"], e)
        return self.prospects

    refresh = load

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def filtered(self) -> tuple[Prospect, ...]:
        return filter_prospects(self.prospects, self.search_term)

    @property
    def visible(self) -> tuple[Prospect, ...]:
        """Filtered then sorted: what the table shows."""
        return sort_prospects(self.filtered, self.sort_config)

    @property
    def stats(self) -> ProspectStats:
        # Stats always cover the whole list, not the filtered view
        return compute_stats(self.prospects)

    @property
    def empty_message(self) -> str:
        if self.search_term.strip():
            return MESSAGES["no_matches"]
        return MESSAGES["no_prospects"]

    def clear_search(self) -> None:
        self.search_term = ""

    def request_sort(self, key: str) -> SortConfig:
        self.sort_config = request_sort(self.sort_config, key)
        return self.sort_config

    def sort_indicator(self, key: str) -> str:
        return sort_indicator(self.sort_config, key)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, draft: ProspectDraft) -> Optional[int]:
        """
        Save a new prospect and reload.

        Raises:
            DraftValidationError: If the brand is blank (nothing is sent)
        """
        draft.validate()

        new_id = None
        try:
            new_id = self.client.create_prospect(draft)
        except ProspectAPIError as e:
            logger.warning("Failed to add prospect %r: %s", draft.brand, e)

        self.refresh()
        return new_id

    def delete(self, prospect_id: int) -> bool:
        """Delete a prospect and reload. Returns the service's success flag."""
        success = False
        try:
            success = self.client.delete_prospect(prospect_id)
        except ProspectAPIError as e:
            logger.warning("Failed to delete prospect %s: %s", prospect_id, e)

        self.refresh()
        return success

    def seed(self) -> None:
        """Load the example prospects and reload."""
        try:
            self.client.seed()
        except ProspectAPIError as e:
            logger.warning("Failed to seed examples: %s", e)

        self.refresh()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_rows(self) -> Sequence[Prospect]:
        """
        Rows an export would contain: the current view, or everything if the
        view is empty.

        Raises:
            NothingToExportError: If there are no prospects at all
        """
        return select_export_rows(self.visible, self.prospects)

    def export_csv(self, today: Optional[date] = None) -> tuple[str, str]:
        """
        Build the CSV download for the current view.

        Returns:
            (filename, csv_content)

        Raises:
            NothingToExportError: If there are no prospects at all
        """
        rows = self.export_rows()
        return export_filename(today), export_csv_string(rows)
