from decimal import Decimal
from typing import Optional, Sequence, Tuple

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.crud.common import apply_changes, commit_or_rollback, paginate, save
from gymcrm.models import Customer


async def list_customers(
    db: AsyncSession,
    user_id: int,
    *,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[Sequence[Customer], int]:
    stmt = select(Customer).where(Customer.user_id == user_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.phone.ilike(pattern),
            )
        )
    return await paginate(db, stmt.order_by(Customer.name), page=page, limit=limit)


async def get_customer(db: AsyncSession, user_id: int, customer_id: int) -> Customer | None:
    res = await db.execute(
        select(Customer).where(Customer.id == customer_id, Customer.user_id == user_id)
    )
    return res.scalar_one_or_none()


async def create_customer(
    db: AsyncSession,
    *,
    user_id: int,
    gym_id: Optional[int],
    commit: bool = True,
    **fields,
) -> Customer:
    customer = Customer(user_id=user_id, gym_id=gym_id, total_spent=Decimal("0"), **fields)
    return await save(db, customer, commit=commit)


async def update_customer(
    db: AsyncSession,
    customer: Customer,
    *,
    commit: bool = True,
    **changes,
) -> Customer:
    apply_changes(customer, changes)
    if commit:
        await commit_or_rollback(db)
        await db.refresh(customer)
    else:
        await db.flush()
    return customer


async def delete_customer(db: AsyncSession, user_id: int, customer_id: int) -> bool:
    res = await db.execute(
        delete(Customer).where(Customer.id == customer_id, Customer.user_id == user_id)
    )
    await commit_or_rollback(db)
    return res.rowcount > 0
