from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field

from gymcrm.api.types import CamelModel

Industry = Literal["gym", "spa", "hotel", "club"]
# "admin" is the platform operator role and is never self-assigned
Role = Literal["manager", "staff", "owner"]


class RegisterInput(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    industry: Industry
    role: Optional[Role] = None
    gym_name: Optional[str] = None


class LoginInput(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProfileInput(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    industry: Optional[Industry] = None
    phone: Optional[str] = None
    bio: Optional[str] = None


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    industry: str
    role: str
    gym_id: Optional[int] = None
    permissions: List[str] = []
    membership_type: Optional[str] = None
    join_date: Optional[datetime] = None
    bio: str = ""
    profile_image: Optional[str] = None
