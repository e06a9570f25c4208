from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel

InvoiceStatus = Literal["Paid", "Pending", "Overdue"]


class InvoiceItem(CamelModel):
    description: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    price: float = Field(ge=0)


class InvoiceCustomer(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None


class InvoiceCreate(CamelModel):
    customer: InvoiceCustomer
    customer_id: Optional[int] = None
    items: List[InvoiceItem] = Field(min_length=1)
    status: InvoiceStatus = "Pending"
    tax: Decimal = Field(default=Decimal("0"), ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = None
    due_date: Optional[date] = None


class InvoiceUpdate(CamelModel):
    customer: Optional[InvoiceCustomer] = None
    items: Optional[List[InvoiceItem]] = None
    status: Optional[InvoiceStatus] = None
    tax: Optional[Decimal] = Field(default=None, ge=0)
    discount: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None
    due_date: Optional[date] = None


class InvoiceOut(CamelModel):
    id: int
    invoice_number: str
    customer_id: Optional[int] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    status: str
    items: list
    subtotal: float
    tax: float
    discount: float
    total: float
    notes: Optional[str] = None
    due_date: Optional[date] = None
    issue_date: datetime


class InvoiceSummary(CamelModel):
    id: str
    customer: str
    status: str
    total: float
    issued_on: datetime = Field(alias="date")
    due_date: Optional[date] = None

    @classmethod
    def from_invoice(cls, invoice) -> "InvoiceSummary":
        return cls(
            id=invoice.invoice_number,
            customer=invoice.customer_name,
            status=invoice.status,
            total=float(invoice.total),
            issued_on=invoice.issue_date,
            due_date=invoice.due_date,
        )
