"""Dashboard statistics over the caller's property portfolio."""

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.models import Property
from app.schemas.dashboard import (
    DashboardStatsResponse,
    PortfolioStats,
    RecentActivityItem,
)

# Bucket upper bounds (inclusive). Integer scores map to 0-40 / 41-70 / 71-100.
LOW_RISK_MAX = 40.0
MEDIUM_RISK_MAX = 70.0

RECENT_ACTIVITY_LIMIT = 10


def risk_bucket(score: float) -> str:
    """'low', 'medium' or 'high' for a risk score; every score falls in exactly one bucket."""
    if score <= LOW_RISK_MAX:
        return "low"
    if score <= MEDIUM_RISK_MAX:
        return "medium"
    return "high"


def dashboard_stats(db: Session, owner_id: int) -> DashboardStatsResponse:
    """Counts per risk bucket, average score, total value and the most recent properties."""
    low = case((Property.risk_score <= LOW_RISK_MAX, 1), else_=0)
    medium = case(
        ((Property.risk_score > LOW_RISK_MAX) & (Property.risk_score <= MEDIUM_RISK_MAX), 1),
        else_=0,
    )
    high = case((Property.risk_score > MEDIUM_RISK_MAX, 1), else_=0)

    row = db.execute(
        select(
            func.count(Property.id),
            func.coalesce(func.sum(low), 0),
            func.coalesce(func.sum(medium), 0),
            func.coalesce(func.sum(high), 0),
            func.avg(Property.risk_score),
            func.sum(Property.estimated_value),
        ).where(Property.user_id == owner_id)
    ).one()
    total, low_count, medium_count, high_count, avg_score, total_value = row

    recent = db.scalars(
        select(Property)
        .where(Property.user_id == owner_id)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
    )

    return DashboardStatsResponse(
        stats=PortfolioStats(
            total_properties=int(total),
            high_risk_count=int(high_count),
            medium_risk_count=int(medium_count),
            low_risk_count=int(low_count),
            average_risk_score=float(avg_score or 0),
            total_estimated_value=float(total_value or 0),
        ),
        recent_activity=[
            RecentActivityItem(
                id=p.id,
                address=p.address,
                risk_score=p.risk_score,
                created_at=p.created_at,
            )
            for p in recent
        ],
    )
