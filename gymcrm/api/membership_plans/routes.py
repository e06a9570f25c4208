from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.membership_plans.types import MembershipPlanInput, MembershipPlanOut, MembershipPlanUpdate
from gymcrm.api.types import dump_list
from gymcrm.crud.membershipPlansCrud import create_plan, delete_plan, get_plan, list_plans, update_plan
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/gym/membership-plans", tags=["membership-plans"])


@router.get("")
async def plans_list(user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    return {"success": True, "plans": dump_list(MembershipPlanOut, await list_plans(db, user.id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def plans_create(
    data: MembershipPlanInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    plan = await create_plan(db, user_id=user.id, gym_id=user.gym_id, **data.model_dump())
    return {"success": True, "plan": MembershipPlanOut.model_validate(plan).dump()}


@router.put("/{plan_id}")
async def plans_update(
    plan_id: int,
    data: MembershipPlanUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    plan = await get_plan(db, user.id, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Membership plan not found")
    plan = await update_plan(db, plan, **data.model_dump(exclude_unset=True, exclude_none=True))
    return {"success": True, "plan": MembershipPlanOut.model_validate(plan).dump()}


@router.delete("/{plan_id}")
async def plans_delete(plan_id: int, user: User = Depends(check_subscription), db: AsyncSession = Depends(get_db)):
    if not await delete_plan(db, user.id, plan_id):
        raise HTTPException(status_code=404, detail="Membership plan not found")
    return {"success": True, "message": "Membership plan deleted successfully"}
