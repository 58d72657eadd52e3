"""Dashboard statistics for the authenticated user's portfolio."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.dashboard import DashboardStatsResponse
from app.services.dashboard import dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> DashboardStatsResponse:
    """
    Risk bucket counts (low 0-40, medium 41-70, high 71-100), average risk
    score, total estimated value and the 10 most recent properties.
    """
    return dashboard_stats(db, user.id)
