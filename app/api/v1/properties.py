"""Property CRUD for the authenticated user. The owner is always the session user."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.property import PropertyCreate, PropertyOut, PropertyUpdate
from app.services.properties import (
    PropertyNotFoundError,
    create_property,
    delete_property,
    get_property,
    list_properties,
    update_property,
)
from app.services.risk_assessment import build_assessment_request, dispatch_in_background

router = APIRouter()


def _not_found(e: PropertyNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("", response_model=list[PropertyOut])
def get_properties(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[PropertyOut]:
    """List the caller's properties, newest first."""
    return [PropertyOut.model_validate(p) for p in list_properties(db, user.id)]


@router.post("", response_model=PropertyOut, status_code=status.HTTP_201_CREATED)
def post_property(
    body: PropertyCreate,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PropertyOut:
    """
    Create a property owned by the caller with risk_score 0 and status 'active'.

    The property is handed to the risk-assessment service after the response is
    sent; the score is written back later.
    """
    prop = create_property(db, user.id, body)
    background_tasks.add_task(
        dispatch_in_background, build_assessment_request(prop), get_settings()
    )
    return PropertyOut.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyOut)
def get_one_property(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PropertyOut:
    try:
        return PropertyOut.model_validate(get_property(db, user.id, property_id))
    except PropertyNotFoundError as e:
        raise _not_found(e) from e


@router.put("/{property_id}", response_model=PropertyOut)
def put_property(
    property_id: int,
    body: PropertyUpdate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PropertyOut:
    """Update address, coordinates, type, value or notes. Risk fields are not editable here."""
    try:
        prop = update_property(db, user.id, property_id, body)
    except PropertyNotFoundError as e:
        raise _not_found(e) from e
    return PropertyOut.model_validate(prop)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_property(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    try:
        delete_property(db, user.id, property_id)
    except PropertyNotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
