"""
Membership renewal: customer update, renewal transaction and paid invoice
committed together or not at all
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import RenewalWindow, format_long_date, renewal_window, utcnow
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.customersCrud import update_customer
from gymcrm.crud.invoicesCrud import create_invoice
from gymcrm.crud.notificationsCrud import create_notification
from gymcrm.crud.transactionsCrud import create_transaction
from gymcrm.models import Customer, Invoice, Transaction, User

logger = get_logger("services.renewal")


@dataclass
class RenewalRequest:
    membership_type: str
    membership_fees: Decimal
    membership_duration: int
    membership_start_date: date
    payment_mode: str
    membership_days: int = 0
    transaction_date: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass
class RenewalResult:
    customer: Customer
    transaction: Transaction
    invoice: Invoice
    window: RenewalWindow


def preview(customer: Customer, request: RenewalRequest, today: Optional[date] = None) -> RenewalWindow:
    return renewal_window(
        current_start=customer.membership_start_date,
        current_end=customer.membership_end_date,
        current_duration_months=customer.membership_duration,
        requested_start=request.membership_start_date,
        months=request.membership_duration,
        days=request.membership_days,
        today=today,
    )


def describe(request: RenewalRequest, window: RenewalWindow) -> str:
    text = (
        f"{request.membership_type.upper()} membership renewal for {request.membership_duration} months "
        f"({format_long_date(window.covered_from)} to {format_long_date(window.new_end_date)})"
    )
    if request.notes:
        text += f" - Notes: {request.notes}"
    return text


async def renew_membership(
    db: AsyncSession,
    *,
    user: User,
    customer: Customer,
    request: RenewalRequest,
    today: Optional[date] = None,
) -> RenewalResult:
    window = preview(customer, request, today)
    paid_at = request.transaction_date or utcnow()
    description = describe(request, window)

    try:
        await update_customer(
            db,
            customer,
            commit=False,
            membership_type=request.membership_type,
            membership_fees=request.membership_fees,
            membership_duration=request.membership_duration,
            membership_days=request.membership_days,
            membership_start_date=window.new_start_date,
            membership_end_date=window.new_end_date,
            transaction_date=paid_at,
            payment_mode=request.payment_mode,
        )
        invoice = await create_invoice(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            customer_id=customer.id,
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            customer_address=customer.address,
            status="Paid",
            items=[{"description": description, "quantity": 1, "price": float(request.membership_fees)}],
            notes=request.notes,
            due_date=paid_at.date(),
            issue_date=paid_at,
            commit=False,
        )
        transaction = await create_transaction(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            customer_id=customer.id,
            invoice_id=invoice.id,
            transaction_type="MEMBERSHIP_RENEWAL",
            amount=request.membership_fees,
            payment_mode=request.payment_mode,
            transaction_date=paid_at,
            membership_type=request.membership_type,
            description=description,
            commit=False,
        )
        await create_notification(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            type="invoice_created",
            title="Invoice Created",
            message=f"Renewal invoice {invoice.invoice_number} created for {customer.name}",
            data={"invoiceNumber": invoice.invoice_number, "customerId": customer.id},
            link="/invoices",
            commit=False,
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Renewal failed for customer {customer.id}, rolled back")
        raise

    for row in (customer, invoice, transaction):
        await db.refresh(row)
    logger.info(
        f"Renewed customer {customer.id} until {window.new_end_date} "
        f"({'extended' if window.will_extend else 'restarted'}), invoice {invoice.invoice_number}"
    )
    return RenewalResult(customer=customer, transaction=transaction, invoice=invoice, window=window)
