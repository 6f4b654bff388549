"""Family records: pass-through persistence for the family routes."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kinship.models import Family
from kinship.schemas.family import FamilyCreate, FamilyUpdate
from kinship.services.errors import InternalError, NotFoundError

logger = logging.getLogger(__name__)


def list_families(db: Session) -> list[Family]:
    try:
        return db.query(Family).order_by(Family.id).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to list families")
        raise InternalError("Failed to load families") from e


def get_family(db: Session, family_id: int) -> Family:
    try:
        family = db.get(Family, family_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to load family: family_id=%s", family_id)
        raise InternalError("Failed to load family") from e
    if family is None:
        raise NotFoundError("Family not found")
    return family


def create_family(db: Session, body: FamilyCreate) -> Family:
    family = Family(
        name=body.name,
        description=body.description,
        notes=body.notes,
        historical_names=list(body.historical_names),
    )
    db.add(family)
    _commit(db, "Failed to create family")
    db.refresh(family)
    logger.info("Family created: family_id=%s", family.id)
    return family


def update_family(db: Session, family_id: int, body: FamilyUpdate) -> Family:
    """Overwrite the fields present in `body`; omitted fields keep their values."""
    family = get_family(db, family_id)
    if body.name is not None:
        family.name = body.name
    if body.description is not None:
        family.description = body.description
    if body.notes is not None:
        family.notes = body.notes
    if body.historical_names is not None:
        family.historical_names = list(body.historical_names)
    _commit(db, "Failed to update family")
    db.refresh(family)
    return family


def delete_family(db: Session, family_id: int) -> str:
    """Delete the family and return its name."""
    family = get_family(db, family_id)
    name = family.name
    db.delete(family)
    _commit(db, "Failed to delete family")
    logger.info("Family deleted: family_id=%s", family_id)
    return name


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(message)
        raise InternalError(message) from e
