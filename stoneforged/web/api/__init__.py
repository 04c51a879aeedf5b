"""REST API routes."""

from stoneforged.web.api.router import router

__all__ = ["router"]
