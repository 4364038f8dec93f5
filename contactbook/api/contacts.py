"""Contact API endpoints.

Create and update take multipart form data so a photo can be uploaded
alongside the fields.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from pydantic import ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from contactbook.api.dependencies import get_contact_service, get_current_user, get_photo_storage
from contactbook.errors import MalformedRequestError
from contactbook.schemas.auth import UserRecord
from contactbook.schemas.contact import (
    DEFAULT_PAGE_SIZE,
    ContactCreate,
    ContactPage,
    ContactQuery,
    ContactRecord,
    ContactUpdate,
)
from contactbook.services.contacts import ContactService, coerce_flag
from contactbook.services.uploads import PhotoStorage

router = APIRouter(prefix="/contacts", tags=["contacts"])


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def _contact_create(data: dict[str, Any]) -> ContactCreate:
    try:
        return ContactCreate(**data)
    except ValidationError as e:
        raise MalformedRequestError(_validation_message(e)) from e


def _contact_update(data: dict[str, Any]) -> ContactUpdate:
    try:
        return ContactUpdate(**data)
    except ValidationError as e:
        raise MalformedRequestError(_validation_message(e)) from e


@router.post("", response_model=ContactRecord, status_code=status.HTTP_201_CREATED)
async def create_contact(
    name: Annotated[str, Form()],
    current_user: Annotated[UserRecord, Depends(get_current_user)],
    contact_service: Annotated[ContactService, Depends(get_contact_service)],
    storage: Annotated[PhotoStorage, Depends(get_photo_storage)],
    email: Annotated[str | None, Form()] = None,
    phone: Annotated[str | None, Form()] = None,
    photo: Annotated[UploadFile | None, File()] = None,
):
    """Create a contact owned by the current user."""
    contact_data = _contact_create(
        {
            "name": name.strip(),
            "email": _blank_to_none(email),
            "phone": _blank_to_none(phone),
        }
    )

    if photo is None:
        return contact_service.create(current_user, contact_data)

    photo_filename = await storage.save(photo)
    try:
        return contact_service.create(current_user, contact_data, photo_filename)
    except Exception:
        storage.discard(photo_filename)
        raise


@router.get("", response_model=ContactPage)
async def list_contacts(
    current_user: Annotated[UserRecord, Depends(get_current_user)],
    contact_service: Annotated[ContactService, Depends(get_contact_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_PAGE_SIZE,
    search: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
    fetch_all: Annotated[str | None, Query(alias="all")] = None,
):
    """List contacts with search, sorting and pagination.

    Admins may pass ``all=true`` to list every user's contacts.
    """
    query = ContactQuery(
        page=page,
        limit=limit,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        all=fetch_all,
    )
    return contact_service.list(current_user, query)


@router.get("/{contact_id}", response_model=ContactRecord)
async def get_contact(
    contact_id: int,
    current_user: Annotated[UserRecord, Depends(get_current_user)],
    contact_service: Annotated[ContactService, Depends(get_contact_service)],
):
    """Get a specific contact."""
    return contact_service.get(current_user, contact_id)


@router.patch("/{contact_id}", response_model=ContactRecord)
async def update_contact(
    contact_id: int,
    current_user: Annotated[UserRecord, Depends(get_current_user)],
    contact_service: Annotated[ContactService, Depends(get_contact_service)],
    storage: Annotated[PhotoStorage, Depends(get_photo_storage)],
    request: Request,
):
    """Update the fields that were sent; omitted fields are left unchanged.

    Sending an empty email or phone clears it. ``removePhoto=true`` clears
    the photo unless a new one is uploaded in the same request.
    """
    # Raw form keeps "sent empty" distinct from "not sent"
    form = await request.form()

    changes: dict[str, Any] = {}
    for field in ("name", "email", "phone"):
        if field not in form:
            continue
        value = form[field]
        if not isinstance(value, str):
            raise MalformedRequestError(f"{field} must be a text field")
        changes[field] = value.strip() if field == "name" else _blank_to_none(value)

    if coerce_flag(form.get("removePhoto")):
        changes["photo"] = None

    photo = form.get("photo")
    if not isinstance(photo, StarletteUploadFile) or not photo.filename:
        photo = None

    contact_changes = _contact_update(changes)

    # Check access before writing anything to disk
    contact_service.get(current_user, contact_id)

    if photo is None:
        return contact_service.update(current_user, contact_id, contact_changes)

    photo_filename = await storage.save(photo)
    try:
        contact_changes = _contact_update({**changes, "photo": photo_filename})
        return contact_service.update(current_user, contact_id, contact_changes)
    except Exception:
        storage.discard(photo_filename)
        raise


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    current_user: Annotated[UserRecord, Depends(get_current_user)],
    contact_service: Annotated[ContactService, Depends(get_contact_service)],
):
    """Delete a contact."""
    contact_service.remove(current_user, contact_id)
