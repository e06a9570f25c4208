"""
Invoices, addressed by their per-tenant ``invoice_number``
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.core.dates import utcnow
from gymcrm.crud.common import apply_changes, commit_or_rollback, paginate, save
from gymcrm.crud.gymsCrud import take_invoice_number
from gymcrm.models import Invoice


def format_invoice_number(year: int, sequence: int) -> str:
    return f"INV-{year}-{sequence:04d}"


async def next_invoice_number(db: AsyncSession, *, user_id: int, gym_id: Optional[int]) -> str:
    """Reserve the next number: the gym counter when there is one, else one past the user's highest this year."""
    year = utcnow().year
    if gym_id is not None:
        sequence = await take_invoice_number(db, gym_id)
    else:
        prefix = format_invoice_number(year, 0)[:-4]
        res = await db.execute(
            select(Invoice.invoice_number).where(
                Invoice.user_id == user_id, Invoice.invoice_number.like(f"{prefix}%")
            )
        )
        taken = [int(number[len(prefix):]) for number in res.scalars() if number[len(prefix):].isdigit()]
        sequence = max(taken, default=0) + 1
    return format_invoice_number(year, sequence)


def compute_totals(items: List[dict], tax=0, discount=0) -> Tuple[Decimal, Decimal]:
    """Subtotal from ``quantity * price`` of each item, and the grand total."""
    subtotal = sum(
        (Decimal(str(item.get("quantity") or 0)) * Decimal(str(item.get("price") or 0)) for item in items),
        Decimal("0"),
    )
    total = subtotal + Decimal(str(tax or 0)) - Decimal(str(discount or 0))
    return subtotal, total


async def list_invoices(
    db: AsyncSession,
    user_id: int,
    *,
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[Sequence[Invoice], int]:
    stmt = select(Invoice).where(Invoice.user_id == user_id)
    if status and status != "All":
        stmt = stmt.where(Invoice.status == status)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Invoice.customer_name.ilike(pattern), Invoice.invoice_number.ilike(pattern)))
    stmt = stmt.order_by(Invoice.issue_date.desc(), Invoice.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def get_invoice_by_number(db: AsyncSession, user_id: int, invoice_number: str) -> Invoice | None:
    res = await db.execute(
        select(Invoice).where(Invoice.user_id == user_id, Invoice.invoice_number == invoice_number)
    )
    return res.scalar_one_or_none()


async def create_invoice(
    db: AsyncSession,
    *,
    user_id: int,
    gym_id: Optional[int],
    customer_name: str,
    customer_email: str,
    items: List[dict],
    customer_id: Optional[int] = None,
    customer_phone: Optional[str] = None,
    customer_address: Optional[str] = None,
    status: str = "Pending",
    tax=0,
    discount=0,
    notes: Optional[str] = None,
    due_date=None,
    issue_date: Optional[datetime] = None,
    commit: bool = True,
) -> Invoice:
    subtotal, total = compute_totals(items, tax, discount)
    invoice = Invoice(
        user_id=user_id,
        gym_id=gym_id,
        customer_id=customer_id,
        invoice_number=await next_invoice_number(db, user_id=user_id, gym_id=gym_id),
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        customer_address=customer_address,
        status=status,
        items=items,
        subtotal=subtotal,
        tax=Decimal(str(tax or 0)),
        discount=Decimal(str(discount or 0)),
        total=total,
        notes=notes,
        due_date=due_date,
        issue_date=issue_date or utcnow(),
    )
    return await save(db, invoice, commit=commit)


async def update_invoice(db: AsyncSession, invoice: Invoice, **changes) -> Invoice:
    if {"items", "tax", "discount"} & changes.keys():
        subtotal, total = compute_totals(
            changes.get("items", invoice.items),
            changes.get("tax", invoice.tax),
            changes.get("discount", invoice.discount),
        )
        changes.update(subtotal=subtotal, total=total)
    apply_changes(invoice, changes)
    await commit_or_rollback(db)
    await db.refresh(invoice)
    return invoice


async def delete_invoice(db: AsyncSession, user_id: int, invoice_number: str) -> bool:
    res = await db.execute(
        delete(Invoice).where(Invoice.user_id == user_id, Invoice.invoice_number == invoice_number)
    )
    await commit_or_rollback(db)
    return res.rowcount > 0
