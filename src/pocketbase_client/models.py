"""
Wire models for the PocketBase REST API.

Field names follow Python conventions; wire names are camelCase and are
accepted on input alongside the field names.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field as ModelField
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for models exchanged with the server."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API-compatible dictionary."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Errors
# =============================================================================

class ValidationError(WireModel):
    """One field-level validation failure."""

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


class ErrorResponse(WireModel):
    """Structured 4xx validation failure returned by the server."""

    status: int
    message: str
    data: Dict[str, ValidationError] = ModelField(default_factory=dict)


# =============================================================================
# Generic responses
# =============================================================================

class Page(WireModel, Generic[T]):
    """
    One page of a list response.

    ``total_items`` is the count across all pages for the filter/sort in
    effect when the page was fetched.
    """

    page: int
    per_page: int
    total_items: int
    items: List[T]


class HealthCheckResponse(WireModel):
    code: int
    message: str


class AuthSuccessResponse(WireModel):
    token: str


class CreateResponse(WireModel):
    """Acknowledgment returned when a record is created."""

    id: str
    created: str
    updated: str
    collection_name: Optional[str] = ModelField(default=None, alias="@collectionName")
    collection_id: Optional[str] = ModelField(default=None, alias="@collectionId")


# =============================================================================
# Collections
# =============================================================================

class Field(WireModel):
    """Schema field of an existing collection."""

    system: bool
    id: str
    name: str
    type: str
    required: bool
    unique: bool


class FieldDeclaration(WireModel):
    """Schema field sent when creating a collection."""

    name: str
    type: str
    required: bool = False


class Collection(WireModel):
    id: str
    created: datetime
    updated: datetime
    type: str
    name: str
    schema_: List[Field] = ModelField(alias="schema")


class CollectionDetails(WireModel):
    """Body of a collection create request."""

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    schema_: List[FieldDeclaration] = ModelField(default_factory=list, alias="schema")
    system: bool = False
    list_rule: Optional[str] = None
    view_rule: Optional[str] = None
    create_rule: Optional[str] = None
    update_rule: Optional[str] = None
    delete_rule: Optional[str] = None
    indexes: List[str] = ModelField(default_factory=list)


# =============================================================================
# Logs
# =============================================================================

class LogListItem(WireModel):
    """One entry of the request log."""

    id: str
    created: datetime
    updated: datetime
    url: str
    method: str
    status: int
    ip: Optional[str] = None
    referer: str
    user_agent: str
    meta: Dict[str, Any]


class LogStatDataPoint(WireModel):
    total: int
    date: str


__all__ = [
    "WireModel",
    "ValidationError",
    "ErrorResponse",
    "Page",
    "HealthCheckResponse",
    "AuthSuccessResponse",
    "CreateResponse",
    "Field",
    "FieldDeclaration",
    "Collection",
    "CollectionDetails",
    "LogListItem",
    "LogStatDataPoint",
]
