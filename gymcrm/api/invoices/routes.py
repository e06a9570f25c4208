from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymcrm.api.deps import check_subscription
from gymcrm.api.invoices.types import InvoiceCreate, InvoiceOut, InvoiceSummary, InvoiceUpdate
from gymcrm.api.types import pagination
from gymcrm.core.conversions import coerce_positive_int
from gymcrm.core.logging_config import get_logger
from gymcrm.crud.common import commit_or_rollback
from gymcrm.crud.invoicesCrud import (
    create_invoice, delete_invoice, get_invoice_by_number, list_invoices, update_invoice,
)
from gymcrm.crud.notificationsCrud import create_notification
from gymcrm.db.postgresql import get_db
from gymcrm.models import User

logger = get_logger("invoices.routes")

router = APIRouter(prefix="/invoices", tags=["invoices"])


async def _load(db: AsyncSession, user: User, invoice_number: str):
    invoice = await get_invoice_by_number(db, user.id, invoice_number)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.get("")
async def invoices_list(
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    page_n = coerce_positive_int(page, 1)
    limit_n = coerce_positive_int(limit, 10)
    rows, total = await list_invoices(db, user.id, status=status, search=search, page=page_n, limit=limit_n)
    return {
        "success": True,
        "invoices": [InvoiceSummary.from_invoice(row).dump() for row in rows],
        "pagination": pagination(total, page_n, limit_n),
    }


@router.get("/{invoice_number}")
async def invoices_get(
    invoice_number: str,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    invoice = await _load(db, user, invoice_number)
    return {"success": True, "invoice": InvoiceOut.model_validate(invoice).dump()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def invoices_create(
    data: InvoiceCreate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    invoice = await create_invoice(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        customer_id=data.customer_id,
        customer_name=data.customer.name,
        customer_email=data.customer.email,
        customer_phone=data.customer.phone,
        customer_address=data.customer.address,
        items=[item.model_dump() for item in data.items],
        status=data.status,
        tax=data.tax,
        discount=data.discount,
        notes=data.notes,
        due_date=data.due_date,
        commit=False,
    )
    await create_notification(
        db,
        user_id=user.id,
        gym_id=user.gym_id,
        type="invoice_created",
        title="Invoice Created",
        message=f"Invoice {invoice.invoice_number} created for {invoice.customer_name}",
        data={"invoiceNumber": invoice.invoice_number},
        link="/invoices",
        commit=False,
    )
    await commit_or_rollback(db)
    await db.refresh(invoice)
    logger.info(f"Invoice {invoice.invoice_number} created by user {user.id}")
    return {"success": True, "invoice": InvoiceOut.model_validate(invoice).dump()}


@router.put("/{invoice_number}")
async def invoices_update(
    invoice_number: str,
    data: InvoiceUpdate,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    invoice = await _load(db, user, invoice_number)
    was_paid = invoice.status == "Paid"

    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"customer", "items"})
    if data.items is not None:
        changes["items"] = [item.model_dump() for item in data.items]
    if data.customer is not None:
        changes.update(
            customer_name=data.customer.name,
            customer_email=data.customer.email,
            customer_phone=data.customer.phone,
            customer_address=data.customer.address,
        )
    invoice = await update_invoice(db, invoice, **changes)

    if invoice.status == "Paid" and not was_paid:
        await create_notification(
            db,
            user_id=user.id,
            gym_id=user.gym_id,
            type="invoice_paid",
            title="Invoice Paid",
            message=f"Invoice {invoice.invoice_number} has been paid",
            data={"invoiceNumber": invoice.invoice_number},
            link="/invoices",
        )
    return {"success": True, "invoice": InvoiceOut.model_validate(invoice).dump()}


@router.delete("/{invoice_number}")
async def invoices_delete(
    invoice_number: str,
    user: User = Depends(check_subscription),
    db: AsyncSession = Depends(get_db),
):
    if not await delete_invoice(db, user.id, invoice_number):
        raise HTTPException(status_code=404, detail="Invoice not found")
    return {"success": True, "message": "Invoice deleted successfully"}
