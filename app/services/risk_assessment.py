"""Hand-off to the external risk-assessment service and write-back of its results.

No score is computed here. New properties are announced to the service at
RISK_ASSESSMENT_URL; the service later writes back a score and a risk-factor
breakdown through apply_assessment.
"""

import logging
import time
from typing import TYPE_CHECKING

import httpx
from sqlalchemy.orm import Session

from app.models import Property
from app.schemas.risk import RiskAssessmentRequest, RiskAssessmentResult
from app.services.properties import PropertyNotFoundError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class RiskAssessmentError(Exception):
    """Raised when the assessment service cannot be reached or rejects the request."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def build_assessment_request(prop: Property) -> RiskAssessmentRequest:
    return RiskAssessmentRequest(
        property_id=prop.id,
        address=prop.address,
        latitude=prop.latitude,
        longitude=prop.longitude,
        property_type=prop.property_type,
    )


async def dispatch_assessment(request: RiskAssessmentRequest, settings: "Settings") -> bool:
    """
    POST the property to the assessment service.

    Returns False when no service is configured. Raises RiskAssessmentError on
    connection failure, timeout, or a non-2xx response.
    """
    if not settings.RISK_ASSESSMENT_URL:
        logger.info(
            "No risk assessment service configured; property %s stays unscored",
            request.property_id,
        )
        return False

    timeout = httpx.Timeout(settings.RISK_ASSESSMENT_TIMEOUT_SEC)
    start = time.perf_counter()
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(
                settings.RISK_ASSESSMENT_URL,
                json=request.model_dump(),
            )
    except httpx.ConnectError as e:
        raise RiskAssessmentError("Risk assessment service is unreachable.", cause=e) from e
    except httpx.TimeoutException as e:
        raise RiskAssessmentError("Risk assessment request timed out.", cause=e) from e
    except httpx.HTTPError as e:
        raise RiskAssessmentError("Risk assessment request failed.", cause=e) from e

    elapsed = time.perf_counter() - start
    if not response.is_success:
        raise RiskAssessmentError(
            f"Risk assessment service returned status {response.status_code}."
        )
    logger.info(
        "Dispatched property %s for risk assessment in %.3fs",
        request.property_id,
        elapsed,
    )
    return True


async def dispatch_in_background(request: RiskAssessmentRequest, settings: "Settings") -> None:
    """Background-task wrapper: the HTTP response is already sent, so failures are only logged."""
    try:
        await dispatch_assessment(request, settings)
    except RiskAssessmentError as e:
        logger.warning(
            "Risk assessment dispatch failed for property %s: %s",
            request.property_id,
            e.message,
        )


def apply_assessment(db: Session, property_id: int, result: RiskAssessmentResult) -> Property:
    """Store the score and factor breakdown reported by the assessment service."""
    prop = db.get(Property, property_id)
    if prop is None:
        raise PropertyNotFoundError(property_id)
    prop.risk_score = result.risk_score
    prop.risk_factors = dict(result.risk_factors)
    db.commit()
    db.refresh(prop)
    logger.info("Risk assessment stored for property %s: score=%s", property_id, result.risk_score)
    return prop
