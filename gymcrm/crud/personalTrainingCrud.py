from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import PersonalTrainingAssignment


async def list_assignments(db: AsyncSession, user_id: int) -> List[PersonalTrainingAssignment]:
    res = await db.execute(
        select(PersonalTrainingAssignment)
        .where(PersonalTrainingAssignment.user_id == user_id)
        .order_by(PersonalTrainingAssignment.created_at.desc(), PersonalTrainingAssignment.id.desc())
    )
    return list(res.scalars().all())


async def get_assignment(db: AsyncSession, user_id: int, assignment_id: int) -> PersonalTrainingAssignment | None:
    res = await db.execute(
        select(PersonalTrainingAssignment).where(
            PersonalTrainingAssignment.id == assignment_id, PersonalTrainingAssignment.user_id == user_id
        )
    )
    return res.scalar_one_or_none()


async def create_assignment(
    db: AsyncSession, *, user_id: int, gym_id, commit: bool = True, **fields
) -> PersonalTrainingAssignment:
    return await save(db, PersonalTrainingAssignment(user_id=user_id, gym_id=gym_id, **fields), commit=commit)


async def update_assignment(
    db: AsyncSession, assignment: PersonalTrainingAssignment, *, commit: bool = True, **changes
) -> PersonalTrainingAssignment:
    apply_changes(assignment, changes)
    if commit:
        await commit_or_rollback(db)
        await db.refresh(assignment)
    else:
        await db.flush()
    return assignment


async def delete_assignment(db: AsyncSession, user_id: int, assignment_id: int) -> bool:
    res = await db.execute(
        delete(PersonalTrainingAssignment).where(
            PersonalTrainingAssignment.id == assignment_id, PersonalTrainingAssignment.user_id == user_id
        )
    )
    await commit_or_rollback(db)
    return res.rowcount > 0
