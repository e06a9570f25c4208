from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import require_admin
from gymcrm.api.subscription_plans.types import PlanInput, PlanOut, PlanPriceInput
from gymcrm.api.types import dump_list
from gymcrm.crud.subscriptionPlansCrud import create_plan, get_plan, list_plans, update_plan_price
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/subscription-plans", tags=["subscription-plans"])


@router.get("")
async def plans_list(db: AsyncSession = Depends(get_db)):
    return {"success": True, "plans": dump_list(PlanOut, await list_plans(db))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def plans_create(
    data: PlanInput,
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    plan = await create_plan(db, name=data.name, duration=data.duration, price=data.price)
    return {"success": True, "plan": PlanOut.model_validate(plan).dump()}


@router.put("/{plan_id}")
async def plans_update_price(
    plan_id: int,
    data: PlanPriceInput,
    user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    plan = await get_plan(db, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    plan = await update_plan_price(db, plan, data.price)
    return {"success": True, "plan": PlanOut.model_validate(plan).dump()}
