"""Request/response schemas for family records."""

from pydantic import BaseModel, ConfigDict, Field


class FamilyBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255, alias="Name")
    description: str = Field(default="", alias="Description")
    notes: str = Field(default="", alias="Notes")
    historical_names: list[str] = Field(default_factory=list, alias="HistoricalNames")


class FamilyCreate(FamilyBase):
    """Body for POST /family."""


class FamilyUpdate(BaseModel):
    """Body for PUT /family/{id}; omitted fields keep their stored values."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=255, alias="Name")
    description: str | None = Field(default=None, alias="Description")
    notes: str | None = Field(default=None, alias="Notes")
    historical_names: list[str] | None = Field(default=None, alias="HistoricalNames")


class FamilyRead(FamilyBase):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., alias="Id")


class PageCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_count: int = Field(..., alias="pageCount")
