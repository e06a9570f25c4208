from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.staff.types import StaffInput, StaffOut, StaffUpdate
from gymcrm.api.types import dump_list
from gymcrm.crud.staffCrud import create_staff, delete_staff, get_staff, list_staff, update_staff
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/staff", tags=["staff"])


async def _load(db: AsyncSession, user: User, staff_id: int):
    staff = await get_staff(db, user.id, staff_id)
    if staff is None:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return staff


@router.get("")
async def staff_list(user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    return {"success": True, "staff": dump_list(StaffOut, await list_staff(db, user.id))}


@router.get("/{staff_id}")
async def staff_get(staff_id: int, user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    staff = await _load(db, user, staff_id)
    return {"success": True, "staff": StaffOut.model_validate(staff).dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def staff_create(
    data: StaffInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    staff = await create_staff(db, user_id=user.id, gym_id=user.gym_id, **data.model_dump(exclude_none=True))
    return {"success": True, "staff": StaffOut.model_validate(staff).dump()}


@router.put("/{staff_id}")
async def staff_update(
    staff_id: int,
    data: StaffUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    staff = await _load(db, user, staff_id)
    staff = await update_staff(db, staff, **data.model_dump(exclude_unset=True, exclude_none=True))
    return {"success": True, "staff": StaffOut.model_validate(staff).dump()}


@router.delete("/{staff_id}")
async def staff_delete(staff_id: int, user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    if not await delete_staff(db, user.id, staff_id):
        raise HTTPException(status_code=404, detail="Staff member not found")
    return {"success": True, "message": "Staff member deleted successfully"}
