"""Contact storage and the ownership-based access policy on top of it."""

import logging
import math
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from contactbook.errors import ForbiddenError, NotFoundError
from contactbook.models.contact import Contact
from contactbook.schemas.auth import UserRecord
from contactbook.schemas.contact import (
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    ContactCreate,
    ContactPage,
    ContactPageMeta,
    ContactQuery,
    ContactRecord,
    ContactUpdate,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "name": Contact.name,
    "createdAt": Contact.created_at,
}

UPDATABLE_FIELDS = ("name", "email", "phone", "photo")


def coerce_flag(value: Any) -> bool:
    """Interpret a loosely typed query flag.

    Only ``True``, ``"true"``, ``1`` and ``"1"`` count as set.
    """
    if value is True:
        return True
    if isinstance(value, str):
        return value in ("true", "1")
    return type(value) is int and value == 1


class ContactRepository:
    """CRUD over contact rows. Knows nothing about who is asking."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, owner_id: int, fields: dict[str, Any], photo: str | None = None) -> ContactRecord:
        contact = Contact(**fields, photo=photo, owner_id=owner_id)
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        return ContactRecord.model_validate(contact)

    def find(self, contact_id: int) -> ContactRecord | None:
        contact = self.db.get(Contact, contact_id)
        if contact is None:
            return None
        return ContactRecord.model_validate(contact)

    def update_fields(self, contact_id: int, changes: dict[str, Any]) -> ContactRecord:
        contact = self.db.get(Contact, contact_id)
        if contact is None:
            raise NotFoundError("Contact not found")

        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(contact, field, value)

        self.db.commit()
        self.db.refresh(contact)
        return ContactRecord.model_validate(contact)

    def delete(self, contact_id: int) -> bool:
        contact = self.db.get(Contact, contact_id)
        if contact is None:
            return False
        self.db.delete(contact)
        self.db.commit()
        return True

    def search(
        self,
        owner_id: int | None,
        term: str | None,
        sort_by: str,
        descending: bool,
        offset: int,
        limit: int,
    ) -> tuple[list[ContactRecord], int]:
        """Return one page of matching contacts and the total match count.

        ``owner_id=None`` searches every owner's contacts.
        """
        query = self.db.query(Contact)

        if owner_id is not None:
            query = query.filter(Contact.owner_id == owner_id)

        if term:
            query = query.filter(
                or_(
                    Contact.name.icontains(term, autoescape=True),
                    Contact.email.icontains(term, autoescape=True),
                    Contact.phone.icontains(term, autoescape=True),
                )
            )

        total = query.count()

        column = SORT_COLUMNS[sort_by]
        if descending:
            query = query.order_by(column.desc(), Contact.id.desc())
        else:
            query = query.order_by(column.asc(), Contact.id.asc())

        rows = query.offset(offset).limit(limit).all()
        return [ContactRecord.model_validate(row) for row in rows], total


class ContactService:
    """Applies ownership scoping and the admin override to contact operations."""

    def __init__(self, repository: ContactRepository):
        self.repository = repository

    def create(
        self,
        actor: UserRecord,
        contact_data: ContactCreate,
        photo: str | None = None,
    ) -> ContactRecord:
        """Create a contact owned by the actor."""
        contact = self.repository.add(actor.id, contact_data.model_dump(), photo)
        logger.info(f"User {actor.id} created contact {contact.id}")
        return contact

    def list(self, actor: UserRecord, query: ContactQuery) -> ContactPage:
        """List contacts visible to the actor.

        Admins see every owner's contacts when ``all`` is set; everyone
        else, admins included, otherwise sees only their own.
        """
        is_admin = actor.role.is_admin
        fetch_all = is_admin and coerce_flag(query.all)

        sort_by = query.sort_by if query.sort_by in SORT_COLUMNS else DEFAULT_SORT_BY
        sort_order = query.sort_order if query.sort_order in ("ASC", "DESC") else DEFAULT_SORT_ORDER
        term = query.search if query.search and query.search.strip() else None

        contacts, total = self.repository.search(
            owner_id=None if fetch_all else actor.id,
            term=term,
            sort_by=sort_by,
            descending=sort_order == "DESC",
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )

        return ContactPage(
            data=contacts,
            meta=ContactPageMeta(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=math.ceil(total / query.limit),
                is_admin=is_admin,
                fetch_all=fetch_all,
            ),
        )

    def get(self, actor: UserRecord, contact_id: int) -> ContactRecord:
        """Get a contact the actor owns, or any contact for an admin."""
        contact = self.repository.find(contact_id)
        if contact is None:
            raise NotFoundError("Contact not found")

        if not actor.role.is_admin and contact.owner_id != actor.id:
            raise ForbiddenError("You do not own this contact")

        return contact

    def update(self, actor: UserRecord, contact_id: int, changes: ContactUpdate) -> ContactRecord:
        """Apply the explicitly provided fields to a contact."""
        self.get(actor, contact_id)
        contact = self.repository.update_fields(contact_id, changes.changes())
        logger.info(f"User {actor.id} updated contact {contact_id}")
        return contact

    def remove(self, actor: UserRecord, contact_id: int) -> None:
        """Delete a contact."""
        self.get(actor, contact_id)
        if not self.repository.delete(contact_id):
            raise NotFoundError("Contact not found")
        logger.info(f"User {actor.id} deleted contact {contact_id}")
