from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import Staff


async def list_staff(db: AsyncSession, user_id: int) -> List[Staff]:
    res = await db.execute(select(Staff).where(Staff.user_id == user_id).order_by(Staff.name))
    return list(res.scalars().all())


async def get_staff(db: AsyncSession, user_id: int, staff_id: int) -> Staff | None:
    res = await db.execute(select(Staff).where(Staff.id == staff_id, Staff.user_id == user_id))
    return res.scalar_one_or_none()


async def create_staff(db: AsyncSession, *, user_id: int, gym_id, **fields) -> Staff:
    return await save(db, Staff(user_id=user_id, gym_id=gym_id, **fields))


async def update_staff(db: AsyncSession, staff: Staff, **changes) -> Staff:
    apply_changes(staff, changes)
    await commit_or_rollback(db)
    await db.refresh(staff)
    return staff


async def delete_staff(db: AsyncSession, user_id: int, staff_id: int) -> bool:
    res = await db.execute(delete(Staff).where(Staff.id == staff_id, Staff.user_id == user_id))
    await commit_or_rollback(db)
    return res.rowcount > 0
