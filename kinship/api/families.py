"""Family endpoints: CRUD and paged listing, all behind token auth."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kinship.api.auth import get_current_user
from kinship.core.database import get_db
from kinship.schemas.auth import MessageResponse
from kinship.schemas.family import (
    FamilyCreate,
    FamilyRead,
    FamilyUpdate,
    PageCountResponse,
)
from kinship.services import families as family_service
from kinship.services.pagination import page_count, paginate

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/familys", response_model=list[FamilyRead])
def list_families(db: Annotated[Session, Depends(get_db)]) -> list[FamilyRead]:
    """Return every family record."""
    return [FamilyRead.model_validate(f) for f in family_service.list_families(db)]


# Declared before /familys/{page_size}/{page} so "pageCount" is not read as a page size.
@router.get("/familys/pageCount/{page_size}", response_model=PageCountResponse)
def get_page_count(
    page_size: int,
    db: Annotated[Session, Depends(get_db)],
) -> PageCountResponse:
    families = family_service.list_families(db)
    return PageCountResponse(page_count=page_count(families, page_size))


@router.get("/familys/{page_size}/{page}", response_model=list[FamilyRead])
def list_families_paged(
    page_size: int,
    page: int,
    db: Annotated[Session, Depends(get_db)],
) -> list[FamilyRead]:
    """Return one page (1-based) of family records as a plain array."""
    families = family_service.list_families(db)
    return [FamilyRead.model_validate(f) for f in paginate(families, page_size, page)]


@router.get("/family/{family_id}", response_model=FamilyRead)
def get_family(family_id: int, db: Annotated[Session, Depends(get_db)]) -> FamilyRead:
    return FamilyRead.model_validate(family_service.get_family(db, family_id))


@router.post("/family", response_model=FamilyRead)
def create_family(
    body: FamilyCreate,
    db: Annotated[Session, Depends(get_db)],
) -> FamilyRead:
    return FamilyRead.model_validate(family_service.create_family(db, body))


@router.put("/family/{family_id}", response_model=FamilyRead)
def update_family(
    family_id: int,
    body: FamilyUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> FamilyRead:
    """Merge the supplied fields over the stored family."""
    return FamilyRead.model_validate(family_service.update_family(db, family_id, body))


@router.delete("/family/{family_id}", response_model=MessageResponse)
def delete_family(
    family_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    name = family_service.delete_family(db, family_id)
    return MessageResponse(message=f"Family {name} with id {family_id} deleted successfully")
