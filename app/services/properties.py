"""Property store. Every query is filtered by the owner id taken from the verified session."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Property
from app.schemas.property import DEFAULT_PROPERTY_STATUS, PropertyCreate, PropertyUpdate

logger = logging.getLogger(__name__)


class PropertyNotFoundError(Exception):
    """Raised when a property does not exist or belongs to another user; callers cannot tell which."""

    def __init__(self, property_id: int) -> None:
        self.property_id = property_id
        self.message = "Property not found"
        super().__init__(self.message)


def list_properties(db: Session, owner_id: int) -> list[Property]:
    """All properties of the owner, newest first."""
    stmt = (
        select(Property)
        .where(Property.user_id == owner_id)
        .order_by(Property.created_at.desc(), Property.id.desc())
    )
    return list(db.scalars(stmt))


def get_property(db: Session, owner_id: int, property_id: int) -> Property:
    stmt = select(Property).where(
        Property.id == property_id,
        Property.user_id == owner_id,
    )
    prop = db.scalar(stmt)
    if prop is None:
        raise PropertyNotFoundError(property_id)
    return prop


def create_property(db: Session, owner_id: int, data: PropertyCreate) -> Property:
    """Persist a new unscored property (risk_score 0, status active) for the owner."""
    prop = Property(
        user_id=owner_id,
        address=data.address,
        latitude=data.latitude,
        longitude=data.longitude,
        property_type=data.property_type,
        status=DEFAULT_PROPERTY_STATUS,
        estimated_value=data.estimated_value,
        risk_score=0.0,
        risk_factors={},
        notes=data.notes,
    )
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info("Created property id=%s owner=%s", prop.id, owner_id)
    return prop


def update_property(
    db: Session, owner_id: int, property_id: int, data: PropertyUpdate
) -> Property:
    """Apply the fields present in the payload. Explicit nulls clear optional fields only."""
    prop = get_property(db, owner_id, property_id)
    changes = data.model_dump(exclude_unset=True)
    for field in ("address", "latitude", "longitude", "property_type"):
        if changes.get(field) is None:
            changes.pop(field, None)
    for field, value in changes.items():
        setattr(prop, field, value)
    db.commit()
    db.refresh(prop)
    return prop


def delete_property(db: Session, owner_id: int, property_id: int) -> None:
    prop = get_property(db, owner_id, property_id)
    db.delete(prop)
    db.commit()
    logger.info("Deleted property id=%s owner=%s", property_id, owner_id)
