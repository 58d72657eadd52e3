"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    Role,
    SignupRequest,
    UserOut,
    UserResponse,
)
from app.schemas.dashboard import (
    DashboardStatsResponse,
    PortfolioStats,
    RecentActivityItem,
)
from app.schemas.health import HealthResponse
from app.schemas.property import (
    PropertyCreate,
    PropertyOut,
    PropertyType,
    PropertyUpdate,
)
from app.schemas.risk import (
    RiskAssessmentDispatchResponse,
    RiskAssessmentRequest,
    RiskAssessmentResult,
)

__all__ = [
    "CurrentUser",
    "DashboardStatsResponse",
    "HealthResponse",
    "LoginRequest",
    "PortfolioStats",
    "PropertyCreate",
    "PropertyOut",
    "PropertyType",
    "PropertyUpdate",
    "RecentActivityItem",
    "RiskAssessmentDispatchResponse",
    "RiskAssessmentRequest",
    "RiskAssessmentResult",
    "Role",
    "SignupRequest",
    "UserOut",
    "UserResponse",
]
