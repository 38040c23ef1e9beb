"""
Pydantic schemas for the AI insight endpoints
"""
from pydantic import Field

from app.schemas.base import CamelModel


class SummaryRequest(CamelModel):
    period: str = Field(..., min_length=1, description="Human-readable period, e.g. 'last 30 days'")


class SummaryResponse(CamelModel):
    summary: str


class NoteRequest(CamelModel):
    donor_name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    campaign_name: str = Field(..., min_length=1)


class NoteResponse(CamelModel):
    note: str
