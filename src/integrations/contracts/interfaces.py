from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PolicyStatus(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class PolicyType(str, Enum):
    HEALTH = "HEALTH"
    LIFE = "LIFE"
    AUTO = "AUTO"
    HOME = "HOME"
    TRAVEL = "TRAVEL"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


# ---------------------------------------------------------------------------
# Wire model base
# ---------------------------------------------------------------------------

class WireModel(BaseModel):
    """Base for every payload exchanged with the backend.

    Attributes are snake_case in Python and camelCase on the wire
    (``first_name`` <-> ``firstName``). Both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def as_calendar_date(value: Any) -> Any:
    """Reduce a stored date-time to the calendar date part.

    ``"2025-03-01T10:15:00"`` and ``datetime(2025, 3, 1, 10, 15)`` both become
    ``2025-03-01``. Anything else is returned untouched for the field
    validator to judge.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def as_timestamp(value: Any) -> Any:
    """Promote a bare ``date`` to midnight; strings are left to the datetime field."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    return value


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------

T = TypeVar("T")


class ApiResponse(WireModel, Generic[T]):
    """Single-entity / list envelope: ``{data, message, success}``."""

    data: Optional[T] = None
    message: str = ""
    success: bool = True


class PagedResponse(WireModel, Generic[T]):
    """One page window over a collection. ``page`` is zero-based."""

    content: List[T] = Field(default_factory=list)
    page: int = Field(default=0, ge=0)
    size: int = Field(default=5, ge=1)
    total_elements: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    last: bool = True

    @model_validator(mode="after")
    def _check_window(self) -> "PagedResponse":
        if len(self.content) > self.size:
            raise ValueError(f"page content has {len(self.content)} items but size is {self.size}")
        return self

    @property
    def is_out_of_range(self) -> bool:
        # Spring-style backends echo an out-of-range page index with empty content.
        return self.total_pages > 0 and self.page >= self.total_pages


# ---------------------------------------------------------------------------
# Abstract resource interface
# ---------------------------------------------------------------------------

EntityT = TypeVar("EntityT", bound=WireModel)


class ResourceApi(ABC, Generic[EntityT]):
    """Every entity accessor (real HTTP or in-process) implements this interface."""

    @abstractmethod
    async def list(self) -> ApiResponse[List[EntityT]]:
        """Fetch the full unpaginated collection."""

    @abstractmethod
    async def list_paginated(
        self,
        page: int = 0,
        size: int = 5,
        sort_field: str = "id",
        sort_direction: str = "asc",
    ) -> PagedResponse[EntityT]:
        """Fetch one page window."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> ApiResponse[EntityT]:
        """Fetch a single entity; raises NotFoundError when absent."""

    @abstractmethod
    async def create(self, payload: WireModel) -> ApiResponse[EntityT]:
        """Create an entity; the backend assigns id and timestamps."""

    @abstractmethod
    async def update(self, payload: WireModel) -> ApiResponse[EntityT]:
        """Replace an entity. ``payload`` carries the id."""

    @abstractmethod
    async def delete(self, entity_id: int) -> ApiResponse[None]:
        """Remove an entity."""


class OwnedResourceApi(ResourceApi[EntityT]):
    """Resources that can be filtered by their owning client."""

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> ApiResponse[List[EntityT]]:
        """Fetch every entity linked to ``owner_id``."""
