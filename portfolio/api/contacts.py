"""
Contact message endpoints.

Anyone may submit a message; reading, marking and deleting need an admin.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_repository, parse_id, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.post("", response_model=schemas.Contact, status_code=status.HTTP_201_CREATED)
def create_contact(contact: schemas.ContactCreate, repo: ContentRepository = Depends(get_repository)):
    created = repo.create_contact(contact)
    logger.info("contact_received: id=%s", created.id)
    return created


@router.get("", response_model=List[schemas.Contact])
def list_contacts(
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    return repo.list_contacts()


@router.get("/{contact_id}", response_model=schemas.Contact)
def get_contact(
    contact_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    contact = repo.get_contact(parse_id(contact_id, "contact"))
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.put("/{contact_id}/read")
def mark_contact_read(
    contact_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.mark_contact_read(parse_id(contact_id, "contact")):
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"message": "Contact marked as read"}


@router.delete("/{contact_id}")
def delete_contact(
    contact_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.delete_contact(parse_id(contact_id, "contact")):
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"message": "Contact deleted successfully"}
