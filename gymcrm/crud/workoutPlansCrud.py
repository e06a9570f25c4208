from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import AssignedWorkoutPlan, WorkoutPlan


async def list_plans(db: AsyncSession, gym_id: int) -> List[WorkoutPlan]:
    res = await db.execute(
        select(WorkoutPlan).where(WorkoutPlan.gym_id == gym_id).order_by(WorkoutPlan.created_at.desc())
    )
    return list(res.scalars().all())


async def get_plan(db: AsyncSession, gym_id: int, plan_id: int) -> WorkoutPlan | None:
    res = await db.execute(select(WorkoutPlan).where(WorkoutPlan.id == plan_id, WorkoutPlan.gym_id == gym_id))
    return res.scalar_one_or_none()


async def create_plan(
    db: AsyncSession,
    *,
    gym_id: int,
    name: str,
    goal: str,
    duration: int,
    level: str,
    weeks: list,
) -> WorkoutPlan:
    plan = WorkoutPlan(gym_id=gym_id, name=name, goal=goal, duration=duration, level=level, weeks=weeks)
    return await save(db, plan)


async def update_plan(db: AsyncSession, plan: WorkoutPlan, **changes) -> WorkoutPlan:
    apply_changes(plan, changes)
    await commit_or_rollback(db)
    await db.refresh(plan)
    return plan


async def delete_plan(db: AsyncSession, gym_id: int, plan_id: int) -> bool:
    await db.execute(delete(AssignedWorkoutPlan).where(AssignedWorkoutPlan.plan_id == plan_id))
    res = await db.execute(delete(WorkoutPlan).where(WorkoutPlan.id == plan_id, WorkoutPlan.gym_id == gym_id))
    await commit_or_rollback(db)
    return res.rowcount > 0


async def list_assigned(db: AsyncSession, gym_id: int) -> List[AssignedWorkoutPlan]:
    res = await db.execute(
        select(AssignedWorkoutPlan)
        .options(selectinload(AssignedWorkoutPlan.plan))
        .where(AssignedWorkoutPlan.gym_id == gym_id)
        .order_by(AssignedWorkoutPlan.created_at.desc())
    )
    return list(res.scalars().all())


async def assign_plan(
    db: AsyncSession,
    *,
    gym_id: int,
    member_id: int,
    member_name: str,
    plan_id: int,
    start_date: date,
    notes: Optional[str] = None,
) -> AssignedWorkoutPlan:
    assigned = AssignedWorkoutPlan(
        gym_id=gym_id,
        member_id=member_id,
        member_name=member_name,
        plan_id=plan_id,
        start_date=start_date,
        notes=notes,
    )
    db.add(assigned)
    await commit_or_rollback(db)
    res = await db.execute(
        select(AssignedWorkoutPlan)
        .options(selectinload(AssignedWorkoutPlan.plan))
        .where(AssignedWorkoutPlan.id == assigned.id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one()


async def delete_assigned(db: AsyncSession, gym_id: int, assigned_id: int) -> bool:
    res = await db.execute(
        delete(AssignedWorkoutPlan).where(AssignedWorkoutPlan.id == assigned_id, AssignedWorkoutPlan.gym_id == gym_id)
    )
    await commit_or_rollback(db)
    return res.rowcount > 0
