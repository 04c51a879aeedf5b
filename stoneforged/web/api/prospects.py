"""Prospect endpoints: list, add, delete, seed, stats and CSV export."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, StreamingResponse
from sqlalchemy.orm import Session

from stoneforged.constants import MESSAGES, SEEDED_COUNT_HEADER, SORTABLE_FIELDS
from stoneforged.export import (
    NothingToExportError,
    export_csv_string,
    export_filename,
    select_export_rows,
)
from stoneforged.views import SortConfig, compute_stats, filter_prospects, sort_prospects
from stoneforged.web.api.models import (
    CreateResponse,
    DeleteResponse,
    ProspectCreate,
    ProspectResponse,
    StatsResponse,
)
from stoneforged.web.database import (
    get_db,
    list_prospects,
    insert_prospect,
    delete_prospect,
    seed_examples,
    load_snapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_SORT_PATTERN = "^(" + "|".join(SORTABLE_FIELDS) + ")$"


@router.get("/prospects", response_model=List[ProspectResponse])
def get_prospects(db: Session = Depends(get_db)):
    """List every prospect, highest score first."""
    return list_prospects(db)


@router.post("/prospects", response_model=CreateResponse)
def create_prospect(prospect: ProspectCreate, db: Session = Depends(get_db)):
    """
    Add a prospect.

    The body is stored as sent; nothing is required or range-checked.
    """
    new_id = insert_prospect(
        db,
        brand=prospect.brand,
        trigger=prospect.trigger,
        score=prospect.score,
        decision_maker=prospect.decision_maker,
        next_action=prospect.next_action,
    )
    return CreateResponse(success=True, id=new_id)


@router.get("/prospects/stats", response_model=StatsResponse)
def get_prospect_stats(db: Session = Depends(get_db)):
    """Total, high-readiness count and average score across all prospects."""
    stats = compute_stats(load_snapshot(db))
    return StatsResponse(**stats.to_dict())


@router.get("/prospects/export")
def export_prospects_csv(
    db: Session = Depends(get_db),
    q: Optional[str] = None,
    sort: Optional[str] = Query(default=None, pattern=_SORT_PATTERN),
    direction: str = Query(default="asc", pattern="^(asc|desc)$"),
):
    """
    Download prospects as CSV.

    Exports the view described by the search term and sort; an empty view
    falls back to every prospect.
    """
    prospects = load_snapshot(db)
    sort_config = SortConfig(sort, direction) if sort else None
    view = sort_prospects(filter_prospects(prospects, q), sort_config)

    try:
        rows = select_export_rows(view, prospects)
    except NothingToExportError:
        raise HTTPException(status_code=404, detail=MESSAGES["nothing_to_export"])

    csv_content = export_csv_string(rows)
    filename = export_filename()
    logger.info("Exporting %d prospects as %s", len(rows), filename)

    return StreamingResponse(
        iter([csv_content]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.delete("/prospects/{prospect_id}", response_model=DeleteResponse)
def remove_prospect(prospect_id: int, db: Session = Depends(get_db)):
    """Delete a prospect. A missing id is reported, not treated as an error."""
    return DeleteResponse(success=delete_prospect(db, prospect_id))


@router.get("/seed", response_class=PlainTextResponse)
def seed(db: Session = Depends(get_db)):
    """
    Insert the example prospects (idempotent).

    The body is always the same message; the number of rows actually
    inserted goes in the X-Seeded-Count header.
    """
    inserted = seed_examples(db)
    return PlainTextResponse(
        MESSAGES["seeded"],
        headers={SEEDED_COUNT_HEADER: str(inserted)},
    )
