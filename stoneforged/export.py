"""Export functionality for prospects (CSV, JSON)."""

import csv
import io
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from .constants import CSV_FILENAME_PREFIX, CSV_HEADERS, MESSAGES
from .models import Prospect

logger = logging.getLogger(__name__)


class NothingToExportError(ValueError):
    """Raised when an export is requested with no prospects."""
    pass


def select_export_rows(
    view: Sequence[Prospect],
    prospects: Sequence[Prospect],
) -> Sequence[Prospect]:
    """
    Pick the rows to export.

    The current (filtered, sorted) view wins when it has rows; an empty view
    falls back to the full list.

    Raises:
        NothingToExportError: If both are empty
    """
    rows = view if len(view) > 0 else prospects
    if len(rows) == 0:
        raise NothingToExportError(MESSAGES["nothing_to_export"])
    return rows


def export_filename(today: Optional[date] = None, extension: str = "csv") -> str:
    """Download filename for an export, stamped with the date."""
    today = today or date.today()
    return f"{CSV_FILENAME_PREFIX}-{today.isoformat()}.{extension}"


def _csv_score(score: float) -> Union[int, float]:
    # Whole scores are written without a trailing ".0"
    if score is not None and float(score).is_integer():
        return int(score)
    return score


def _write_csv(prospects: Sequence[Prospect], out) -> None:
    header = csv.writer(out, lineterminator="\n")
    header.writerow(CSV_HEADERS)

    # Text columns always quoted, numbers left bare
    writer = csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for p in prospects:
        writer.writerow([
            p.brand or "",
            p.trigger or "",
            _csv_score(p.score),
            p.decision_maker or "",
            p.next_action or "",
        ])


def export_csv_string(prospects: Sequence[Prospect]) -> str:
    """
    Export prospects to CSV string (for web download).

    Args:
        prospects: Prospects to export, in the order they should appear

    Returns:
        CSV content as string
    """
    output = io.StringIO()
    _write_csv(prospects, output)
    return output.getvalue()


def export_to_csv(prospects: Sequence[Prospect], output_path: str) -> str:
    """
    Export prospects to CSV file.

    Args:
        prospects: List of prospects to export
        output_path: Path to output file

    Returns:
        Path to the created file
    """
    # Create output directory if needed
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        _write_csv(prospects, f)

    logger.info("Exported %d prospects to %s", len(prospects), output_path)
    return str(output_path)


def export_to_json(prospects: Sequence[Prospect], output_path: str) -> str:
    """
    Write prospects to a JSON document.

    The document carries the export time, the row count and the rows in
    the order given, each in its wire form (see Prospect.to_dict).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = {
        "exported_at": datetime.now().isoformat(timespec="seconds"),
        "total_prospects": len(prospects),
        "prospects": [p.to_dict() for p in prospects],
    }
    output_path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    logger.info("Exported %d prospects to %s", len(prospects), output_path)
    return str(output_path)


EXPORTERS = {
    "csv": export_to_csv,
    "json": export_to_json,
}


def export_prospects(
    prospects: Sequence[Prospect],
    output_path: str,
    format: str = "csv",
) -> str:
    """
    Write prospects to disk in the given format ("csv" or "json").

    Raises:
        ValueError: For any other format
    """
    try:
        exporter = EXPORTERS[format.lower()]
    except KeyError:
        raise ValueError(f"Unsupported export format: {format}") from None
    return exporter(prospects, output_path)
