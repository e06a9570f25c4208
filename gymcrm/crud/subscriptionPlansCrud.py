from decimal import Decimal
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import commit_or_rollback, save
from gymcrm.models import SubscriptionPlan


async def list_plans(db: AsyncSession) -> List[SubscriptionPlan]:
    res = await db.execute(select(SubscriptionPlan).order_by(SubscriptionPlan.id))
    return list(res.scalars().all())


async def get_plan(db: AsyncSession, plan_id: int) -> SubscriptionPlan | None:
    return await db.get(SubscriptionPlan, plan_id)


async def get_plan_by_duration(db: AsyncSession, duration: str) -> SubscriptionPlan | None:
    res = await db.execute(
        select(SubscriptionPlan).where(SubscriptionPlan.duration == duration).order_by(SubscriptionPlan.id)
    )
    return res.scalars().first()


async def create_plan(db: AsyncSession, *, name: str, duration: str, price: Decimal) -> SubscriptionPlan:
    return await save(db, SubscriptionPlan(name=name, duration=duration, price=price))


async def update_plan_price(db: AsyncSession, plan: SubscriptionPlan, price: Decimal) -> SubscriptionPlan:
    plan.price = price
    await commit_or_rollback(db)
    await db.refresh(plan)
    return plan
