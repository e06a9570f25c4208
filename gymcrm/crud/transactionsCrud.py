"""
Transactions and the customer ``total_spent`` they drive
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.logging_config import get_logger
from gymcrm.crud.common import apply_changes, commit_or_rollback, save
from gymcrm.models import Customer, Transaction

logger = get_logger("crud.transactions")


async def list_for_gym(db: AsyncSession, gym_id: int) -> List[Transaction]:
    res = await db.execute(
        select(Transaction)
        .where(Transaction.gym_id == gym_id)
        .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
    )
    return list(res.scalars().all())


async def list_for_customer(db: AsyncSession, user_id: int, customer_id: int) -> List[Transaction]:
    res = await db.execute(
        select(Transaction)
        .where(Transaction.customer_id == customer_id, Transaction.user_id == user_id)
        .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
    )
    return list(res.scalars().all())


async def get_transaction(db: AsyncSession, user_id: int, transaction_id: int) -> Transaction | None:
    res = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return res.scalar_one_or_none()


async def recompute_total_spent(db: AsyncSession, customer_id: int) -> Decimal:
    """Set the customer's ``total_spent`` to the sum of their transactions (no commit)."""
    total = await db.scalar(
        select(func.coalesce(func.sum(Transaction.amount), 0)).where(Transaction.customer_id == customer_id)
    )
    total = Decimal(str(total or 0))
    await db.execute(update(Customer).where(Customer.id == customer_id).values(total_spent=total))
    logger.info(f"Updated totalSpent for customer {customer_id}: {total}")
    return total


async def create_transaction(
    db: AsyncSession,
    *,
    user_id: int,
    gym_id: Optional[int],
    customer_id: int,
    transaction_type: str,
    amount: Decimal,
    payment_mode: str,
    transaction_date: Optional[datetime] = None,
    membership_type: Optional[str] = None,
    description: Optional[str] = None,
    status: str = "SUCCESS",
    invoice_id: Optional[int] = None,
    commit: bool = True,
) -> Transaction:
    transaction = Transaction(
        user_id=user_id,
        gym_id=gym_id,
        customer_id=customer_id,
        invoice_id=invoice_id,
        transaction_type=transaction_type,
        amount=amount,
        payment_mode=payment_mode,
        membership_type=membership_type or "none",
        description=description,
        status=status,
    )
    if transaction_date is not None:
        transaction.transaction_date = transaction_date
    db.add(transaction)
    await db.flush()
    await recompute_total_spent(db, customer_id)
    if commit:
        await commit_or_rollback(db)
        await db.refresh(transaction)
    return transaction


async def update_transaction(db: AsyncSession, transaction: Transaction, **changes) -> Transaction:
    apply_changes(transaction, changes)
    await db.flush()
    await recompute_total_spent(db, transaction.customer_id)
    await commit_or_rollback(db)
    await db.refresh(transaction)
    return transaction


async def delete_transaction(db: AsyncSession, transaction: Transaction) -> None:
    customer_id = transaction.customer_id
    await db.delete(transaction)
    await db.flush()
    await recompute_total_spent(db, customer_id)
    await commit_or_rollback(db)
