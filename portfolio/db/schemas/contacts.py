from datetime import datetime

from pydantic import EmailStr, Field

from .base import CamelModel


class ContactCreate(CamelModel):
    """Public message submission; any client-supplied ``isRead`` is ignored."""

    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class Contact(CamelModel):
    id: int
    name: str
    # Stored rows are not re-validated
    email: str
    # Messages imported from the old document store predate the subject field
    subject: str = ""
    message: str
    created_at: datetime
    is_read: bool = False
