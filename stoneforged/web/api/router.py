"""API router."""

from fastapi import APIRouter

from stoneforged.web.api import prospects, config

router = APIRouter(prefix="/api")

router.include_router(prospects.router, tags=["prospects"])
router.include_router(config.router, tags=["config"])
