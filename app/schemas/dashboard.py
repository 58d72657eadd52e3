"""Response schemas for the dashboard statistics endpoint."""

from datetime import datetime

from pydantic import BaseModel, Field


class PortfolioStats(BaseModel):
    """Aggregate counts over the caller's properties. low + medium + high == total."""

    total_properties: int = Field(..., ge=0)
    high_risk_count: int = Field(..., ge=0, description="risk_score above 70.")
    medium_risk_count: int = Field(..., ge=0, description="risk_score above 40, at most 70.")
    low_risk_count: int = Field(..., ge=0, description="risk_score of 40 or less.")
    average_risk_score: float = Field(..., ge=0, le=100)
    total_estimated_value: float = Field(..., ge=0)


class RecentActivityItem(BaseModel):
    id: int
    address: str
    risk_score: float
    created_at: datetime


class DashboardStatsResponse(BaseModel):
    """Response for GET /dashboard/stats."""

    stats: PortfolioStats
    recent_activity: list[RecentActivityItem]
