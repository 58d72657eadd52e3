"""Schemas for the external risk-assessment contract (request sent out, result written back)."""

from pydantic import BaseModel, Field, field_validator


class RiskAssessmentRequest(BaseModel):
    """What the assessment service receives for a property."""

    property_id: int
    address: str
    latitude: float
    longitude: float
    property_type: str


class RiskAssessmentResult(BaseModel):
    """What the assessment service writes back: overall score and named sub-scores."""

    risk_score: float = Field(..., ge=0, le=100, description="Overall risk score, 0-100.")
    risk_factors: dict[str, float] = Field(
        default_factory=dict,
        description="Named sub-scores (e.g. flood, fire, crime), each 0-100.",
    )

    @field_validator("risk_factors")
    @classmethod
    def validate_factor_range(cls, v: dict[str, float]) -> dict[str, float]:
        for name, score in v.items():
            if not name or not name.strip():
                raise ValueError("risk factor names must be non-empty")
            if not 0 <= score <= 100:
                raise ValueError(f"risk factor {name!r} must be between 0 and 100")
        return v


class RiskAssessmentDispatchResponse(BaseModel):
    """Response for POST /risk/assess/{property_id}."""

    property_id: int
    dispatched: bool = Field(
        ...,
        description="False when no assessment service is configured; the property keeps its current score.",
    )
