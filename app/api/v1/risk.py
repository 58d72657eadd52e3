"""Risk assessment hand-off (user-triggered) and write-back (assessment service only)."""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import AUTH_REQUIRED_DETAIL
from app.schemas.auth import CurrentUser
from app.schemas.property import PropertyOut
from app.schemas.risk import RiskAssessmentDispatchResponse, RiskAssessmentResult
from app.services.properties import PropertyNotFoundError, get_property
from app.services.risk_assessment import (
    RiskAssessmentError,
    apply_assessment,
    build_assessment_request,
    dispatch_assessment,
)

logger = logging.getLogger(__name__)

router = APIRouter()
service_bearer = HTTPBearer(auto_error=False)


def require_risk_service(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(service_bearer)],
) -> None:
    """Dependency: the caller must present RISK_SERVICE_TOKEN as a Bearer token."""
    expected = get_settings().RISK_SERVICE_TOKEN
    if (
        expected is None
        or credentials is None
        or not hmac.compare_digest(
            credentials.credentials.encode("utf-8"),
            expected.get_secret_value().encode("utf-8"),
        )
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTH_REQUIRED_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/assess/{property_id}",
    response_model=RiskAssessmentDispatchResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def post_assess(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> RiskAssessmentDispatchResponse:
    """(Re)submit one of the caller's properties to the risk-assessment service."""
    try:
        prop = get_property(db, user.id, property_id)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    try:
        dispatched = await dispatch_assessment(build_assessment_request(prop), get_settings())
    except RiskAssessmentError as e:
        logger.warning("Risk assessment dispatch failed for property %s: %s", property_id, e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e
    return RiskAssessmentDispatchResponse(property_id=property_id, dispatched=dispatched)


@router.put("/assessments/{property_id}", response_model=PropertyOut)
def put_assessment(
    property_id: int,
    body: RiskAssessmentResult,
    db: Annotated[Session, Depends(get_db)],
    _service: Annotated[None, Depends(require_risk_service)],
) -> PropertyOut:
    """Write back the score and factor breakdown computed by the assessment service."""
    try:
        prop = apply_assessment(db, property_id, body)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return PropertyOut.model_validate(prop)
