"""Pydantic models for the REST API."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class ProspectCreate(BaseModel):
    """Create prospect request. Every field is optional and unchecked."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "brand": "VitalSleep",
                "trigger": "New R&D hire",
                "score": 8.0,
                "decision_maker": "R&D Director",
                "next_action": "Send sample",
            }
        }
    )

    brand: Optional[str] = None
    trigger: Optional[str] = None
    score: Optional[float] = None
    decision_maker: Optional[str] = None
    next_action: Optional[str] = None


class ProspectResponse(BaseModel):
    """Prospect response model."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    brand: Optional[str]
    trigger: Optional[str]
    score: Optional[float]
    decision_maker: Optional[str]
    next_action: Optional[str]


class CreateResponse(BaseModel):
    success: bool
    id: int


class DeleteResponse(BaseModel):
    success: bool


class StatsResponse(BaseModel):
    """Aggregate stats across all prospects."""
    total: int
    high_readiness: int
    average_score: float
    average_display: str


class TriggerResponse(BaseModel):
    """A trigger category and the score it implies."""
    label: str
    value: str
    bonus: int
    score: float


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: bool
    version: str
    uptime_seconds: int
