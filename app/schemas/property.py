"""Pydantic schemas for properties: create/update payloads and the stored representation."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PropertyType = Literal["residential", "commercial", "industrial"]

PROPERTY_TYPE_VALUES: frozenset[str] = frozenset({"residential", "commercial", "industrial"})

DEFAULT_PROPERTY_STATUS = "active"


def _normalize_property_type(value: Any) -> Any:
    """Accept 'Commercial', ' INDUSTRIAL ' etc.; validation of the value happens after."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _strip_optional_text(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class PropertyCreate(BaseModel):
    """Payload for POST /properties. Owner is taken from the session, never from the body."""

    model_config = ConfigDict(extra="ignore")

    address: str = Field(..., min_length=1, max_length=512, description="Street address or place name.")
    latitude: float = Field(..., ge=-90, le=90, description="WGS84 latitude.")
    longitude: float = Field(..., ge=-180, le=180, description="WGS84 longitude.")
    property_type: PropertyType = Field(
        default="residential",
        description="residential, commercial or industrial.",
    )
    estimated_value: float | None = Field(default=None, ge=0, description="Estimated value; optional.")
    notes: str | None = Field(default=None, max_length=5000, description="Free-text notes; optional.")

    @field_validator("address", mode="before")
    @classmethod
    def strip_address(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("property_type", mode="before")
    @classmethod
    def normalize_property_type(cls, v: Any) -> Any:
        return _normalize_property_type(v)

    @field_validator("estimated_value", "notes", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        return _strip_optional_text(v)


class PropertyUpdate(BaseModel):
    """Partial update for PUT /properties/{id}. Risk fields are not client-writable."""

    model_config = ConfigDict(extra="ignore")

    address: str | None = Field(default=None, min_length=1, max_length=512)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    property_type: PropertyType | None = None
    estimated_value: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=5000)

    @field_validator("address", mode="before")
    @classmethod
    def strip_address(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("property_type", mode="before")
    @classmethod
    def normalize_property_type(cls, v: Any) -> Any:
        return _normalize_property_type(v)

    @field_validator("estimated_value", "notes", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        return _strip_optional_text(v)


class PropertyOut(BaseModel):
    """Stored property as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    address: str
    latitude: float
    longitude: float
    property_type: str
    status: str
    estimated_value: float | None = None
    risk_score: float = Field(..., ge=0, le=100)
    risk_factors: dict[str, float] = Field(default_factory=dict)
    notes: str | None = None
    created_at: datetime

    @field_validator("risk_factors", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v
