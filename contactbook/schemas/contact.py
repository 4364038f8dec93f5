"""Contact schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from contactbook.schemas.base import CamelModel, ExactEmail, RecordModel

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "DESC"
DEFAULT_PAGE_SIZE = 10


class ContactCreate(CamelModel):
    """Create a new contact."""

    name: str = Field(..., min_length=1, max_length=255)
    email: ExactEmail | None = None
    phone: str | None = Field(None, max_length=50)


class ContactUpdate(CamelModel):
    """Partial update of a contact.

    Only fields that were explicitly set are applied, so an unset field is
    left alone while ``photo=None`` clears the stored photo.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    email: ExactEmail | None = None
    phone: str | None = Field(None, max_length=50)
    photo: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def name_cannot_be_cleared(self) -> "ContactUpdate":
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the explicitly provided fields."""
        return self.model_dump(exclude_unset=True)


class ContactRecord(RecordModel):
    """A stored contact."""

    id: int
    name: str
    email: str | None
    phone: str | None
    photo: str | None
    created_at: datetime
    owner_id: int


class ContactQuery(CamelModel):
    """Listing options. Sort values are kept raw; the service falls back to defaults."""

    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    search: str | None = None
    sort_by: str | None = DEFAULT_SORT_BY
    sort_order: str | None = DEFAULT_SORT_ORDER
    all: Any = None


class ContactPageMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    is_admin: bool
    fetch_all: bool


class ContactPage(CamelModel):
    """One page of contacts plus paging metadata."""

    data: list[ContactRecord]
    meta: ContactPageMeta
