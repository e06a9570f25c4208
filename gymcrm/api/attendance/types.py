from datetime import datetime
from typing import Optional

from pydantic import Field

from gymcrm.api.types import CamelModel


class CheckInInput(CamelModel):
    member_id: int
    notes: Optional[str] = None


class QRCheckInInput(CamelModel):
    payload: str = Field(min_length=1)
    notes: Optional[str] = None


class AttendanceMember(CamelModel):
    id: int
    name: str
    membership_type: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AttendanceOut(CamelModel):
    id: int
    member: Optional[AttendanceMember] = None
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    method: str
    notes: Optional[str] = None
    status: str

    @classmethod
    def from_record(cls, record) -> dict:
        return cls(
            id=record.id,
            member=AttendanceMember.model_validate(record.customer) if record.customer else None,
            check_in_time=record.check_in_time,
            check_out_time=record.check_out_time,
            method=record.method,
            notes=record.notes,
            status="Checked Out" if record.check_out_time else "Checked In",
        ).dump()
