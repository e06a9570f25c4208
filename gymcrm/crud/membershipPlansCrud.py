from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import MembershipPlan


async def list_plans(db: AsyncSession, user_id: int) -> List[MembershipPlan]:
    res = await db.execute(
        select(MembershipPlan).where(MembershipPlan.user_id == user_id).order_by(MembershipPlan.created_at.desc())
    )
    return list(res.scalars().all())


async def get_plan(db: AsyncSession, user_id: int, plan_id: int) -> MembershipPlan | None:
    res = await db.execute(select(MembershipPlan).where(MembershipPlan.id == plan_id, MembershipPlan.user_id == user_id))
    return res.scalar_one_or_none()


async def create_plan(db: AsyncSession, *, user_id: int, gym_id, **fields) -> MembershipPlan:
    return await save(db, MembershipPlan(user_id=user_id, gym_id=gym_id, **fields))


async def update_plan(db: AsyncSession, plan: MembershipPlan, **changes) -> MembershipPlan:
    apply_changes(plan, changes)
    await commit_or_rollback(db)
    await db.refresh(plan)
    return plan


async def delete_plan(db: AsyncSession, user_id: int, plan_id: int) -> bool:
    res = await db.execute(delete(MembershipPlan).where(MembershipPlan.id == plan_id, MembershipPlan.user_id == user_id))
    await commit_or_rollback(db)
    return res.rowcount > 0
