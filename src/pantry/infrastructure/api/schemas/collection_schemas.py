"""Pydantic schemas for collection endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCollectionRequest(BaseModel):
    """Request body for creating a collection."""

    name: str = Field(..., description="Collection name")
    schema_: dict[str, str] = Field(
        default_factory=dict,
        alias="schema",
        description="Mapping of field name to type (text, string, number, date, media)",
    )

    model_config = ConfigDict(populate_by_name=True)


class UpdateCollectionRequest(BaseModel):
    """Request body for updating a collection. Omitted values are kept."""

    name: str | None = None
    schema_: dict[str, str] | None = Field(default=None, alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class CollectionResponse(BaseModel):
    id: str
    name: str
    schema_: dict[str, str] = Field(..., alias="schema")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class ValidationErrorDetail(BaseModel):
    field: str
    message: str
    code: str


class ValidationErrorResponse(BaseModel):
    error: str = "Validation error"
    details: list[ValidationErrorDetail]
