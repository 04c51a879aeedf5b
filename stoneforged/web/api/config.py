"""Service info endpoints: trigger table and health."""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stoneforged import __version__
from stoneforged.scoring import TRIGGER_OPTIONS, score_for_trigger
from stoneforged.web.api.models import HealthResponse, TriggerResponse
from stoneforged.web.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

_start_time = time.time()


@router.get("/triggers", response_model=List[TriggerResponse])
def list_triggers():
    """Trigger categories in form order, with the score each one sets."""
    return [
        TriggerResponse(
            label=option.label,
            value=option.value,
            bonus=option.bonus,
            score=score_for_trigger(option.value),
        )
        for option in TRIGGER_OPTIONS
    ]


@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns service status and whether the database answers.
    """
    database_ok = True
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        database_ok = False

    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        database=database_ok,
        version=__version__,
        uptime_seconds=int(time.time() - _start_time),
    )
