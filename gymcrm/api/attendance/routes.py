from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.attendance.types import AttendanceOut, CheckInInput, QRCheckInInput
from gymcrm.api.deps import check_subscription
from gymcrm.api.types import pagination
from gymcrm.core.conversions import coerce_positive_int
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.attendanceCrud import (
    check_in, check_out, get_open_record, get_record, list_active, list_attendance, list_range, today_stats,
)
from gymcrm.crud.customersCrud import get_customer
from gymcrm.db.postgresql import get_db
from gymcrm.models import User
from gymcrm.services.qr_service import InvalidQRPayload, member_payload, parse_member_payload, render_png

logger = get_logger("attendance.routes")

router = APIRouter(prefix="/attendance", tags=["attendance"])


async def _check_in(db: AsyncSession, user: User, member_id: int, method: str, notes: Optional[str]):
    customer = await get_customer(db, user.id, member_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Member not found")
    if await get_open_record(db, user.id, customer.id) is not None:
        raise HTTPException(status_code=400, detail="Member already checked in")
    record = await check_in(db, user_id=user.id, gym_id=user.gym_id, customer=customer, method=method, notes=notes)
    return {"success": True, "attendance": AttendanceOut.from_record(record)}


@router.get("")
async def attendance_list(
    date: Optional[date] = None,
    startDate: Optional[date] = None,
    endDate: Optional[date] = None,
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    page_n = coerce_positive_int(page, 1)
    limit_n = coerce_positive_int(limit, 20)
    rows, total = await list_attendance(
        db,
        user.id,
        day=date,
        start_date=startDate,
        end_date=endDate,
        status=status,
        page=page_n,
        limit=limit_n,
    )
    return {
        "success": True,
        "attendance": [AttendanceOut.from_record(row) for row in rows],
        "stats": await today_stats(db, user.id),
        "pagination": pagination(total, page_n, limit_n),
    }


@router.post("/check-in", status_code=status.HTTP_201_CREATED)
async def attendance_check_in(
    data: CheckInInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    return await _check_in(db, user, data.member_id, "Manual", data.notes)


@router.post("/qr-check-in", status_code=status.HTTP_201_CREATED)
async def attendance_qr_check_in(
    data: QRCheckInInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    try:
        scanned = parse_member_payload(data.payload)
    except InvalidQRPayload as e:
        raise HTTPException(status_code=400, detail=str(e))
    if scanned.gym_id != user.gym_id:
        logger.warning(f"QR for gym {scanned.gym_id} scanned by user {user.id} of gym {user.gym_id}")
        raise HTTPException(status_code=403, detail="QR code belongs to a different gym")
    return await _check_in(db, user, scanned.member_id, "QR", data.notes)


@router.put("/check-out/{attendance_id}")
async def attendance_check_out(
    attendance_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    record = await get_record(db, user.id, attendance_id)
    if record is None or record.check_out_time is not None:
        raise HTTPException(status_code=404, detail="Active check-in not found")
    record = await check_out(db, record)
    return {"success": True, "attendance": AttendanceOut.from_record(record)}


@router.get("/active")
async def attendance_active(
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    rows = await list_active(db, user.id)
    return {"success": True, "attendance": [AttendanceOut.from_record(row) for row in rows]}


@router.get("/range")
async def attendance_range(
    startDate: Optional[date] = None,
    endDate: Optional[date] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if startDate is None or endDate is None:
        raise HTTPException(status_code=400, detail="Start date and end date are required")
    rows = await list_range(db, user.id, startDate, endDate)
    return {"success": True, "attendance": [AttendanceOut.from_record(row) for row in rows]}


@router.get("/stats")
async def attendance_stats(
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    return {"success": True, "stats": await today_stats(db, user.id)}


@router.get("/member-qr/{member_id}")
async def attendance_member_qr(
    member_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await get_customer(db, user.id, member_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Member not found")
    if user.gym_id is None:
        raise HTTPException(status_code=400, detail="No gym associated with this user")
    png = render_png(member_payload(customer.id, user.gym_id))
    return Response(content=png, media_type="image/png")
