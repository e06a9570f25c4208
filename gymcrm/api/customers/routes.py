from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.customers.types import CustomerCreate, CustomerOut, CustomerUpdate, RenewalOut, RenewInput
from gymcrm.api.deps import check_subscription
from gymcrm.api.invoices.types import InvoiceOut
from gymcrm.api.transactions.types import TransactionOut
from gymcrm.api.types import dump_list, pagination
from gymcrm.core.conversions import coerce_positive_int
from gymcrm.core.dates import membership_end
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.common import commit_or_rollback
from gymcrm.crud.customersCrud import (
    create_customer, delete_customer, get_customer, list_customers, update_customer,
)
from gymcrm.crud.notificationsCrud import create_notification
from gymcrm.crud.transactionsCrud import create_transaction, list_for_customer
from gymcrm.db.postgresql import get_db
from gymcrm.models import User
from gymcrm.services import renewal_service

logger = get_logger("customers.routes")

router = APIRouter(prefix="/customers", tags=["customers"])


async def _load(db: AsyncSession, user: User, customer_id: int):
    customer = await get_customer(db, user.id, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


def _renewal_request(data: RenewInput) -> renewal_service.RenewalRequest:
    return renewal_service.RenewalRequest(
        membership_type=data.membership_type,
        membership_fees=data.membership_fees,
        membership_duration=data.membership_duration,
        membership_days=data.membership_days,
        membership_start_date=data.membership_start_date,
        transaction_date=data.transaction_date,
        payment_mode=data.payment_mode,
        notes=data.notes,
    )


def _renewal_block(window) -> dict:
    return RenewalOut(
        will_extend=window.will_extend,
        new_start_date=window.new_start_date,
        new_end_date=window.new_end_date,
        current_end_date=window.current_end_date,
    ).dump()


@router.get("")
async def customers_list(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    page_n = coerce_positive_int(page, 1)
    limit_n = coerce_positive_int(limit, 10)
    rows, total = await list_customers(db, user.id, search=search, page=page_n, limit=limit_n)
    return {
        "success": True,
        "customers": dump_list(CustomerOut, rows),
        "total": total,
        "pagination": pagination(total, page_n, limit_n),
    }


@router.get("/{customer_id}")
async def customers_get(
    customer_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await _load(db, user, customer_id)
    return {"success": True, "customer": CustomerOut.model_validate(customer).dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def customers_create(
    data: CustomerCreate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    fields = data.model_dump(exclude_none=True)
    start = data.membership_start_date
    if start and not data.membership_end_date and (data.membership_duration or data.membership_days):
        fields["membership_end_date"] = membership_end(start, data.membership_duration, data.membership_days)

    customer = await create_customer(db, user_id=user.id, gym_id=user.gym_id, commit=False, **fields)
    if data.membership_fees > 0:
        await create_transaction(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            customer_id=customer.id,
            transaction_type="MEMBERSHIP_JOINING",
            amount=data.membership_fees,
            payment_mode=data.payment_mode or "cash",
            transaction_date=data.transaction_date,
            membership_type=data.membership_type,
            description=f"Membership joining fee for {customer.name}",
            commit=False,
        )
    await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="customer_created",
        title="New Customer",
        message=f"{customer.name} has been added as a customer",
        data={"customerId": customer.id},
        link="/customers",
        commit=False,
    )
    await commit_or_rollback(db)
    await db.refresh(customer)
    logger.info(f"Customer {customer.id} created by user {user.id}")
    return {"success": True, "customer": CustomerOut.model_validate(customer).dump()}


@router.put("/{customer_id}")
async def customers_update(
    customer_id: int,
    data: CustomerUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await _load(db, user, customer_id)
    customer = await update_customer(db, customer, **data.model_dump(exclude_unset=True, exclude_none=True))
    return {"success": True, "customer": CustomerOut.model_validate(customer).dump()}


@router.delete("/{customer_id}")
async def customers_delete(
    customer_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_customer(db, user.id, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    return {"success": True, "message": "Customer deleted successfully"}


@router.get("/{customer_id}/transactions")
async def customers_transactions(
    customer_id: int,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    await _load(db, user, customer_id)
    rows = await list_for_customer(db, user.id, customer_id)
    return {"success": True, "transactions": dump_list(TransactionOut, rows)}


@router.post("/{customer_id}/renew/preview")
async def customers_renew_preview(
    customer_id: int,
    data: RenewInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await _load(db, user, customer_id)
    window = renewal_service.preview(customer, _renewal_request(data))
    return {"success": True, "renewal": _renewal_block(window)}


@router.post("/{customer_id}/renew")
async def customers_renew(
    customer_id: int,
    data: RenewInput,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    customer = await _load(db, user, customer_id)
    try:
        result = await renewal_service.renew_membership(
            db, user=user, customer=customer, request=_renewal_request(data)
        )
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Error renewing membership")
    return {
        "success": True,
        "customer": CustomerOut.model_validate(result.customer).dump(),
        "transaction": TransactionOut.model_validate(result.transaction).dump(),
        "invoice": InvoiceOut.model_validate(result.invoice).dump(),
        "renewal": _renewal_block(result.window),
    }
