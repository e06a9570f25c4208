from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.transactions.types import TransactionCreate, TransactionOut, TransactionUpdate
from gymcrm.api.types import dump_list
from gymcrm.crud.customersCrud import get_customer
from gymcrm.crud.transactionsCrud import (
    create_transaction, delete_transaction, get_transaction, list_for_customer, list_for_gym,
    update_transaction,
)
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

router = APIRouter(prefix="/transactions", tags=["transactions"])


async def _load(db: AsyncSession, user: User, transaction_id: int):
    transaction = await get_transaction(db, user.id, transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("/gym/{gym_id}")
async def gym_transactions(
    gym_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if user.gym_id != gym_id:
        raise HTTPException(status_code=403, detail="Access denied to this gym's transactions")
    rows = await list_for_gym(db, gym_id)
    return {"success": True, "transactions": dump_list(TransactionOut, rows)}


@router.get("/customer/{customer_id}")
async def customer_transactions(
    customer_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    rows = await list_for_customer(db, user.id, customer_id)
    return {"success": True, "transactions": dump_list(TransactionOut, rows)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def transactions_create(
    data: TransactionCreate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if await get_customer(db, user.id, data.customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    transaction = await create_transaction(
        db, user_id=user.id, gym_id=user.gym_id, **data.model_dump(exclude_none=True)
    )
    return {"success": True, "transaction": TransactionOut.model_validate(transaction).dump()}


@router.patch("/{transaction_id}")
async def transactions_update(
    transaction_id: int,
    data: TransactionUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    transaction = await _load(db, user, transaction_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No valid fields to update")
    transaction = await update_transaction(db, transaction, **changes)
    return {"success": True, "transaction": TransactionOut.model_validate(transaction).dump()}


@router.delete("/{transaction_id}")
async def transactions_delete(
    transaction_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    transaction = await _load(db, user, transaction_id)
    await delete_transaction(db, transaction)
    return {"success": True, "message": "Transaction deleted successfully"}
