from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import NutritionPlan


async def list_plans(db: AsyncSession, gym_id: int) -> List[NutritionPlan]:
    res = await db.execute(
        select(NutritionPlan).where(NutritionPlan.gym_id == gym_id).order_by(NutritionPlan.created_at.desc())
    )
    return list(res.scalars().all())


async def get_plan(db: AsyncSession, gym_id: int, plan_id: int) -> NutritionPlan | None:
    res = await db.execute(
        select(NutritionPlan).where(NutritionPlan.id == plan_id, NutritionPlan.gym_id == gym_id)
    )
    return res.scalar_one_or_none()


async def create_plan(db: AsyncSession, *, gym_id: int, **fields) -> NutritionPlan:
    return await save(db, NutritionPlan(gym_id=gym_id, **fields))


async def update_plan(db: AsyncSession, plan: NutritionPlan, **changes) -> NutritionPlan:
    apply_changes(plan, changes)
    await commit_or_rollback(db)
    await db.refresh(plan)
    return plan


async def delete_plan(db: AsyncSession, gym_id: int, plan_id: int) -> bool:
    res = await db.execute(
        delete(NutritionPlan).where(NutritionPlan.id == plan_id, NutritionPlan.gym_id == gym_id)
    )
    await commit_or_rollback(db)
    return res.rowcount > 0
