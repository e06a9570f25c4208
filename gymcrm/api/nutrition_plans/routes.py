from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription, require_gym
from gymcrm.api.nutrition_plans.types import NutritionPlanInput, NutritionPlanOut, NutritionPlanUpdate
from gymcrm.crud.nutritionPlansCrud import create_plan, delete_plan, get_plan, list_plans, update_plan
from gymcrm.db.postgresql import get_db
from gymcrm.models import Gym

router = APIRouter(
    prefix="/nutrition-plans",
    tags=["nutrition-plans"],
    dependencies=[Depends(check_subscription)],
)


async def _load(db: AsyncSession, gym: Gym, plan_id: int):
    plan = await get_plan(db, gym.id, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Nutrition plan not found")
    return plan


@router.get("")
async def nutrition_plans_list(gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    plans = await list_plans(db, gym.id)
    return {"success": True, "plans": [NutritionPlanOut.model_validate(p).dump() for p in plans]}


@router.get("/{plan_id}")
async def nutrition_plans_get(plan_id: int, gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    plan = await _load(db, gym, plan_id)
    return {"success": True, "plan": NutritionPlanOut.model_validate(plan).dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def nutrition_plans_create(
    data: NutritionPlanInput,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    plan = await create_plan(db, gym_id=gym.id, **data.model_dump(mode="json"))
    return {"success": True, "plan": NutritionPlanOut.model_validate(plan).dump()}


@router.put("/{plan_id}")
async def nutrition_plans_update(
    plan_id: int,
    data: NutritionPlanUpdate,
    gym: Gym = Depends(require_gym),
    db: AsyncSession = Depends(get_db),
):
    plan = await _load(db, gym, plan_id)
    plan = await update_plan(db, plan, **data.model_dump(mode="json", exclude_unset=True, exclude_none=True))
    return {"success": True, "plan": NutritionPlanOut.model_validate(plan).dump()}


@router.delete("/{plan_id}")
async def nutrition_plans_delete(plan_id: int, gym: Gym = Depends(require_gym), db: AsyncSession = Depends(get_db)):
    if not await delete_plan(db, gym.id, plan_id):
        raise HTTPException(status_code=404, detail="Nutrition plan not found")
    return {"success": True, "message": "Nutrition plan deleted successfully"}
