from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from gymcrm.api.types import CamelModel


class ContactInput(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)
    phone: Optional[str] = None
    subject: Optional[str] = None


class ContactOut(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    created_at: datetime
