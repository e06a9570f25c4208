"""
Personal training: a new assignment bills the customer through a pending
invoice and a ledger entry, a renewal through a paid one. Each flow commits
as a whole or not at all.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import format_long_date, membership_end, utcnow
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.invoicesCrud import create_invoice
from gymcrm.crud.notificationsCrud import create_notification
from gymcrm.crud.personalTrainingCrud import create_assignment, update_assignment
from gymcrm.crud.transactionsCrud import create_transaction
from gymcrm.models import Customer, Invoice, PersonalTrainingAssignment, Staff, Transaction, User

logger = get_logger("services.personal_training")

INVOICE_DUE_DAYS = 7


@dataclass
class TrainingWindow:
    will_extend: bool
    start_date: date
    end_date: date
    covered_from: date


@dataclass
class TrainingResult:
    assignment: PersonalTrainingAssignment
    transaction: Transaction
    invoice: Invoice
    window: Optional[TrainingWindow] = None


def _months(duration: int) -> str:
    return f"{duration} month{'s' if duration != 1 else ''}"


def renewal_window(
    assignment: PersonalTrainingAssignment,
    requested_start: date,
    months: int,
    today: Optional[date] = None,
) -> TrainingWindow:
    """Training still running after today is extended from its current end
    and keeps its start date. Otherwise it restarts on ``requested_start``."""
    today = today or utcnow().date()
    if assignment.end_date > today:
        covered_from = assignment.end_date + timedelta(days=1)
        return TrainingWindow(
            will_extend=True,
            start_date=assignment.start_date,
            end_date=membership_end(covered_from, months),
            covered_from=covered_from,
        )
    return TrainingWindow(
        will_extend=False,
        start_date=requested_start,
        end_date=membership_end(requested_start, months),
        covered_from=requested_start,
    )


async def _bill(
    db: AsyncSession,
    *,
    user: User,
    customer: Customer,
    amount: Decimal,
    item: str,
    description: str,
    payment_mode: str,
    paid_at: datetime,
    invoice_status: str,
    due_date: date,
    notes: str,
    title: str,
) -> tuple[Invoice, Transaction]:
    invoice = await create_invoice(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        customer_id=customer.id,
        customer_name=customer.name,
        customer_email=customer.email,
        customer_phone=customer.phone,
        customer_address=customer.address,
        status=invoice_status,
        items=[{"description": item, "quantity": 1, "price": float(amount)}],
        notes=notes,
        due_date=due_date,
        issue_date=paid_at,
        commit=False,
    )
    transaction = await create_transaction(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        customer_id=customer.id,
        invoice_id=invoice.id,
        transaction_type="PERSONAL_TRAINING",
        amount=amount,
        payment_mode=payment_mode,
        transaction_date=paid_at,
        description=description,
        commit=False,
    )
    await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="invoice_created",
        title=title,
        message=f"Invoice {invoice.invoice_number} created for {customer.name}",
        data={"invoiceNumber": invoice.invoice_number, "customerId": customer.id},
        link="/invoices",
        commit=False,
    )
    return invoice, transaction


async def assign_training(
    db: AsyncSession,
    *,
    user: User,
    customer: Customer,
    trainer: Staff,
    start_date: date,
    duration: int,
    fees: Decimal,
    payment_mode: str = "cash",
) -> TrainingResult:
    now = utcnow()
    try:
        assignment = await create_assignment(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            customer=customer,
            trainer=trainer,
            start_date=start_date,
            duration=duration,
            end_date=membership_end(start_date, duration),
            fees=fees,
            commit=False,
        )
        invoice, transaction = await _bill(
            db,
            user=user,
            customer=customer,
            amount=fees,
            item=f"Personal Training with {_months(duration)} duration",
            description=f"Personal training fees for {_months(duration)}",
            payment_mode=payment_mode,
            paid_at=now,
            invoice_status="Pending",
            due_date=now.date() + timedelta(days=INVOICE_DUE_DAYS),
            notes=f"Personal training assignment starting {format_long_date(start_date)}",
            title="Personal Training Invoice",
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Personal training assignment failed for customer {customer.id}, rolled back")
        raise

    for row in (assignment, invoice, transaction):
        await db.refresh(row)
    logger.info(f"Assigned trainer {trainer.id} to customer {customer.id} until {assignment.end_date}")
    return TrainingResult(assignment=assignment, transaction=transaction, invoice=invoice)


async def renew_training(
    db: AsyncSession,
    *,
    user: User,
    assignment: PersonalTrainingAssignment,
    customer: Customer,
    start_date: date,
    duration: int,
    fees: Decimal,
    payment_mode: str = "cash",
    transaction_date: Optional[datetime] = None,
    today: Optional[date] = None,
) -> TrainingResult:
    window = renewal_window(assignment, start_date, duration, today)
    paid_at = transaction_date or utcnow()
    description = (
        f"Personal training renewal for {_months(duration)} "
        f"({format_long_date(window.covered_from)} to {format_long_date(window.end_date)})"
    )
    try:
        await update_assignment(
            db,
            assignment,
            commit=False,
            start_date=window.start_date,
            end_date=window.end_date,
            duration=duration,
            fees=fees,
        )
        invoice, transaction = await _bill(
            db,
            user=user,
            customer=customer,
            amount=fees,
            item=description,
            description=description,
            payment_mode=payment_mode,
            paid_at=paid_at,
            invoice_status="Paid",
            due_date=paid_at.date(),
            notes=f"Personal training renewal ({'extended' if window.will_extend else 'restarted'})",
            title="Personal Training Renewed",
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Personal training renewal failed for assignment {assignment.id}, rolled back")
        raise

    for row in (assignment, invoice, transaction):
        await db.refresh(row)
    logger.info(f"Renewed personal training {assignment.id} until {window.end_date}")
    return TrainingResult(assignment=assignment, transaction=transaction, invoice=invoice, window=window)
