"""Dashboard page routes (server-rendered)."""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, StreamingResponse
from sqlalchemy.orm import Session

from stoneforged.constants import LABELS, MESSAGES, SORTABLE_FIELDS
from stoneforged.export import (
    NothingToExportError,
    export_csv_string,
    export_filename,
    select_export_rows,
)
from stoneforged.models import DraftValidationError, ProspectDraft
from stoneforged.scoring import (
    TRIGGER_OPTIONS,
    find_trigger,
    format_score,
    parse_score_override,
    readiness_band,
)
from stoneforged.views import (
    SortConfig,
    compute_stats,
    filter_prospects,
    request_sort,
    sort_indicator,
    sort_prospects,
)
from stoneforged.web.database import (
    get_db,
    insert_prospect,
    delete_prospect,
    seed_examples,
    load_snapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_templates(request: Request):
    """Get templates from app state."""
    return request.app.state.templates


def parse_sort(sort: Optional[str], direction: Optional[str]) -> Optional[SortConfig]:
    """Sort from query params; anything unrecognised means no sort."""
    if not sort or sort not in SORTABLE_FIELDS:
        return None
    return SortConfig(sort, "desc" if direction == "desc" else "asc")


def view_query(q: Optional[str], sort_config: Optional[SortConfig]) -> str:
    """Query string that reproduces the current view."""
    params = {}
    if q:
        params["q"] = q
    if sort_config:
        params["sort"] = sort_config.key
        params["direction"] = sort_config.direction
    return urlencode(params)


def redirect_home(q: Optional[str], sort_config: Optional[SortConfig]) -> RedirectResponse:
    query = view_query(q, sort_config)
    return RedirectResponse(url=f"/?{query}" if query else "/", status_code=303)


def render_dashboard(
    request: Request,
    db: Session,
    q: Optional[str] = None,
    sort_config: Optional[SortConfig] = None,
    message: Optional[str] = None,
    draft: Optional[ProspectDraft] = None,
    score_text: str = "",
    status_code: int = 200,
) -> HTMLResponse:
    """Render the dashboard for the given view parameters."""
    templates = get_templates(request)
    draft = draft or ProspectDraft()

    prospects = load_snapshot(db)
    visible = sort_prospects(filter_prospects(prospects, q), sort_config)

    def sort_link(key: str) -> str:
        return "/?" + view_query(q, request_sort(sort_config, key))

    rows = [
        {
            "prospect": p,
            "score_display": format_score(p.score),
            "band": readiness_band(p.score),
        }
        for p in visible
    ]

    return templates.TemplateResponse(request, "index.html", {
        "labels": LABELS,
        "stats": compute_stats(prospects),
        "rows": rows,
        "q": q or "",
        "view_query": view_query(q, sort_config),
        "sort": sort_config,
        "sort_link": sort_link,
        "sort_indicator": lambda key: sort_indicator(sort_config, key),
        "empty_message": MESSAGES["no_matches"] if q and q.strip() else MESSAGES["no_prospects"],
        "triggers": TRIGGER_OPTIONS,
        "draft": draft,
        "custom_trigger": draft.trigger if find_trigger(draft.trigger) is None else "",
        "score_text": score_text,
        "message": message,
    }, status_code=status_code)


# ============================================================================
# Pages
# ============================================================================

@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    q: Optional[str] = None,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Main dashboard page."""
    return render_dashboard(request, db, q=q, sort_config=parse_sort(sort, direction))


# ============================================================================
# Form actions
# ============================================================================

@router.post("/prospects/add", response_class=HTMLResponse)
def add_prospect(
    request: Request,
    brand: str = Form(""),
    trigger: str = Form(""),
    custom_trigger: str = Form(""),
    score: str = Form(""),
    decision_maker: str = Form(""),
    next_action: str = Form(""),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    direction: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Save the add form. A blank brand re-renders the page with a message."""
    sort_config = parse_sort(sort, direction)

    draft = ProspectDraft(
        brand=brand,
        decision_maker=decision_maker,
        next_action=next_action,
    ).select_trigger(trigger)
    if not draft.trigger and custom_trigger.strip():
        draft = draft.update(trigger=custom_trigger.strip())
    # An unusable score field keeps the trigger's score
    override = parse_score_override(score)
    if override is not None:
        draft = draft.with_score(override)

    try:
        draft.validate()
    except DraftValidationError as e:
        return render_dashboard(
            request, db, q=q, sort_config=sort_config,
            message=str(e), draft=draft, score_text=score, status_code=400,
        )

    insert_prospect(db, **draft.to_payload())
    return redirect_home(q, sort_config)


@router.post("/prospects/{prospect_id}/delete")
def remove_prospect(
    prospect_id: int,
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    direction: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Delete a prospect and go back to the dashboard."""
    if not delete_prospect(db, prospect_id):
        logger.info("Prospect %d was already gone", prospect_id)
    return redirect_home(q, parse_sort(sort, direction))


@router.post("/seed", response_class=HTMLResponse)
def load_examples(
    request: Request,
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    direction: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Load the example prospects. Says so when nothing new was added."""
    sort_config = parse_sort(sort, direction)
    if seed_examples(db) == 0:
        return render_dashboard(
            request, db, q=q, sort_config=sort_config, message=MESSAGES["nothing_seeded"],
        )
    return redirect_home(q, sort_config)


@router.get("/export.csv")
def export_csv(
    request: Request,
    q: Optional[str] = None,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Download the current view as CSV."""
    sort_config = parse_sort(sort, direction)
    prospects = load_snapshot(db)
    view = sort_prospects(filter_prospects(prospects, q), sort_config)

    try:
        rows = select_export_rows(view, prospects)
    except NothingToExportError as e:
        return render_dashboard(
            request, db, q=q, sort_config=sort_config, message=str(e), status_code=404,
        )

    filename = export_filename()
    return StreamingResponse(
        iter([export_csv_string(rows)]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
