from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription, require_gym
from gymcrm.api.types import dump_list
from gymcrm.api.workout_plans.types import (
    AssignedPlanOut, AssignInput, WorkoutPlanInput, WorkoutPlanOut, WorkoutPlanUpdate,
)
from gymcrm.crud.customersCrud import get_customer
from gymcrm.crud.workoutPlansCrud import (
    assign_plan, create_plan, delete_assigned, delete_plan, get_plan, list_assigned, list_plans, update_plan,
)
from gymcrm.db.postgresql import get_db
from gymcrm.models import Gym, User

router = APIRouter(
    prefix="/workout-plans",
    tags=["workout-plans"],
    dependencies=[Depends(check_subscription)],
)


@router.get("")
async def workout_plans_list(gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    return {"success": True, "plans": dump_list(WorkoutPlanOut, await list_plans(db, gym.id))}


@router.get("/assigned")
async def workout_plans_assigned(gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    return {"success": True, "assignedPlans": dump_list(AssignedPlanOut, await list_assigned(db, gym.id))}


@router.post("/assign", status_code=status.HTTP_201_CREATED)
async def workout_plans_assign(
    data: AssignInput,
    gym: Gym = Depends(require_gym),
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if not (data.member_id and data.member_name and data.plan_id and data.start_date):
        raise HTTPException(status_code=400, detail="Missing required fields")
    if await get_plan(db, gym.id, data.plan_id) is None:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    if await get_customer(db, user.id, data.member_id) is None:
        raise HTTPException(status_code=404, detail="Member not found")
    assigned = await assign_plan(
        db,
        gym_id=gym.id,
        member_id=data.member_id,
        member_name=data.member_name,
        plan_id=data.plan_id,
        start_date=data.start_date,
        notes=data.notes,
    )
    return {
        "success": True,
        "message": "Workout plan assigned successfully",
        "assignedPlan": AssignedPlanOut.model_validate(assigned).dump(),
    }


@router.delete("/assigned/{assigned_id}")
async def workout_plans_unassign(
    assigned_id: int,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_assigned(db, gym.id, assigned_id):
        raise HTTPException(status_code=404, detail="Assigned workout plan not found")
    return {"success": True, "message": "Assigned workout plan deleted successfully"}


@router.get("/{plan_id}")
async def workout_plans_get(plan_id: int, gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    plan = await get_plan(db, gym.id, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    return {"success": True, "plan": WorkoutPlanOut.model_validate(plan).dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def workout_plans_create(
    data: WorkoutPlanInput,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    body = data.dump()
    plan = await create_plan(
        db,
        gym_id=gym.id,
        name=data.name,
        goal=data.goal,
        duration=data.duration,
        level=data.level,
        weeks=body["weeks"],
    )
    return {"success": True, "plan": WorkoutPlanOut.model_validate(plan).dump()}


@router.put("/{plan_id}")
async def workout_plans_update(
    plan_id: int,
    data: WorkoutPlanUpdate,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    plan = await get_plan(db, gym.id, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"weeks"})
    if data.weeks is not None:
        changes["weeks"] = data.dump(include={"weeks"})["weeks"]
    plan = await update_plan(db, plan, **changes)
    return {"success": True, "plan": WorkoutPlanOut.model_validate(plan).dump()}


@router.delete("/{plan_id}")
async def workout_plans_delete(plan_id: int, gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    if not await delete_plan(db, gym.id, plan_id):
        raise HTTPException(status_code=404, detail="Workout plan not found")
    return {"success": True, "message": "Workout plan deleted successfully"}
