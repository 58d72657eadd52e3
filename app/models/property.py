"""ORM model for properties tracked on the map, owned by exactly one user."""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class Property(Base):
    """
    Persisted property. risk_score starts at 0 and is written back by the
    external risk-assessment service together with the risk_factors breakdown.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint(
            "risk_score >= 0 AND risk_score <= 100",
            name="ck_properties_risk_score_range",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    address = Column(String(512), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    property_type = Column(String(32), nullable=False, default="residential")
    status = Column(String(32), nullable=False, default="active")
    estimated_value = Column(Float, nullable=True)
    risk_score = Column(Float, nullable=False, default=0.0)
    risk_factors = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )
